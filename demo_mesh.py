"""
Demo Mesh Module
Procedural geometry for the viewer plus the bounding-sphere and reference
circle used to place the arcball camera.
"""

import math
from typing import Tuple

import numpy as np
from OpenGL.GL import *


class DemoMesh:
    """Indexed triangle mesh rendered as a wireframe display list."""

    def __init__(self, vertices, indices, name='mesh'):
        self.name = name
        self.vertices = np.asarray(vertices, dtype=np.float32).reshape(-1, 3)
        self.indices = np.asarray(indices, dtype=np.uint32).reshape(-1, 3)
        self.dl_wireframe = None

    @property
    def triangle_count(self):
        return len(self.indices)

    def bounding_sphere(self):
        return bounding_sphere(self.vertices)

    def compile_display_list(self):
        """Compile the wireframe display list (call after GL context is created)."""
        self.dl_wireframe = glGenLists(1)
        glNewList(self.dl_wireframe, GL_COMPILE)
        glPolygonMode(GL_FRONT_AND_BACK, GL_LINE)
        glBegin(GL_TRIANGLES)
        for tri in self.indices:
            for i in tri:
                glVertex3f(*self.vertices[i])
        glEnd()
        glPolygonMode(GL_FRONT_AND_BACK, GL_FILL)
        glEndList()
        print(f"✓ Display list ready ({self.triangle_count} triangles)")

    def render(self):
        if self.dl_wireframe is None:
            self.compile_display_list()
        glCallList(self.dl_wireframe)

    def cleanup(self):
        if self.dl_wireframe is not None:
            glDeleteLists(self.dl_wireframe, 1)
            self.dl_wireframe = None


def bounding_sphere(vertices) -> Tuple[np.ndarray, float]:
    """Center of the axis-aligned bounds and a camera stand-off radius.

    The radius is twice the center-to-corner distance so the default eye sits
    well outside the object.
    """
    verts = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    if len(verts) == 0:
        raise ValueError("cannot bound an empty vertex set")
    lo = verts.min(axis=0)
    hi = verts.max(axis=0)
    center = (hi + lo) / 2
    radius = float(np.linalg.norm(hi - center)) * 2
    return center, radius


def circle_points(center, radius, count=180) -> np.ndarray:
    """count points on a circle around center in the z = 0 plane."""
    t = np.arange(count) * (2 * math.pi / count)
    pts = np.zeros((count, 3))
    pts[:, 0] = center[0] + radius * np.cos(t)
    pts[:, 1] = center[1] + radius * np.sin(t)
    return pts


def torus_mesh(major=40.0, minor=15.0, rings=32, sides=16) -> DemoMesh:
    u = np.arange(rings) * (2 * math.pi / rings)
    v = np.arange(sides) * (2 * math.pi / sides)
    uu, vv = np.meshgrid(u, v, indexing='ij')
    ring = major + minor * np.cos(vv)
    verts = np.stack([ring * np.cos(uu), ring * np.sin(uu), minor * np.sin(vv)], axis=-1)

    indices = []
    for i in range(rings):
        for j in range(sides):
            a = i * sides + j
            b = ((i + 1) % rings) * sides + j
            c = ((i + 1) % rings) * sides + (j + 1) % sides
            d = i * sides + (j + 1) % sides
            indices.append((a, b, c))
            indices.append((a, c, d))
    return DemoMesh(verts.reshape(-1, 3), indices, name='torus')


def cube_mesh(size=50.0) -> DemoMesh:
    h = size / 2
    verts = [(x, y, z) for x in (-h, h) for y in (-h, h) for z in (-h, h)]
    # Vertex index bits: 4 = +x, 2 = +y, 1 = +z
    faces = [
        (0, 1, 3, 2), (4, 6, 7, 5),  # -x, +x
        (0, 4, 5, 1), (2, 3, 7, 6),  # -y, +y
        (0, 2, 6, 4), (1, 5, 7, 3),  # -z, +z
    ]
    indices = []
    for a, b, c, d in faces:
        indices.append((a, b, c))
        indices.append((a, c, d))
    return DemoMesh(verts, indices, name='cube')


MESHES = {
    'torus': torus_mesh,
    'cube': cube_mesh,
}
