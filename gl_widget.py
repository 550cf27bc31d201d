"""
GL Widget Module
OpenGL widget that drives an ArcballCamera from Qt input events and draws a
wireframe mesh with the camera's view matrix.
"""

from PyQt5.QtCore import Qt
from PyQt5.QtOpenGL import QGLWidget
from OpenGL.GL import *

from arcball_camera import ArcballCamera, ArcballConfig
from demo_mesh import circle_points


class GLWidget(QGLWidget):
    """OpenGL widget for arcball viewing of a single mesh."""

    def __init__(self, mesh, config=None, view_volume=100.0, parent=None):
        super().__init__(parent)
        self.mesh = mesh
        self.view_volume = view_volume  # Half-height of the orthographic volume
        self.view_depth = 1000.0

        center, radius = mesh.bounding_sphere()
        self.camera = ArcballCamera(center, max(self.width(), 1), max(self.height(), 1),
                                    radius=radius, config=config or ArcballConfig())
        self.circle = circle_points((0.0, 0.0), view_volume)

        self.last_pos = None
        self.pointer_inside = False
        self.setFocusPolicy(Qt.StrongFocus)

    def initializeGL(self):
        glDisable(GL_LIGHTING)
        glDisable(GL_DEPTH_TEST)

        glEnable(GL_LINE_SMOOTH)
        glHint(GL_LINE_SMOOTH_HINT, GL_NICEST)
        glLineWidth(1.0)

        glClearColor(0.0, 0.0, 0.0, 1)

        self.mesh.compile_display_list()

    def resizeGL(self, w, h):
        if w <= 0 or h <= 0:
            print(f"⚠️ Ignoring degenerate viewport size {w}x{h}")
            return

        # Camera works in widget (logical) pixels, the same space as mouse events
        self.camera.resize(max(self.width(), 1), max(self.height(), 1))

        aspect = w / h
        v = self.view_volume
        glViewport(0, 0, w, h)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(-v * aspect, v * aspect, -v, v, -self.view_depth, self.view_depth)
        glMatrixMode(GL_MODELVIEW)

    def paintGL(self):
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        glMatrixMode(GL_MODELVIEW)
        glLoadMatrixf(self.camera.gl_matrix())
        glColor3f(0.8, 0.8, 0.8)
        self.mesh.render()

        # Reference ring stays fixed on screen
        glLoadIdentity()
        glColor3f(0.3, 0.5, 0.9)
        glBegin(GL_LINE_LOOP)
        for pt in self.circle:
            glVertex3f(*pt)
        glEnd()

    def enterEvent(self, event):
        self.pointer_inside = True
        super().enterEvent(event)

    def leaveEvent(self, event):
        self.pointer_inside = False
        self.last_pos = None
        super().leaveEvent(event)

    def mousePressEvent(self, event):
        self.last_pos = event.pos()

    def mouseReleaseEvent(self, event):
        self.last_pos = None

    def mouseMoveEvent(self, event):
        if not self.pointer_inside:
            return

        # Qt keeps delivering moves outside the widget while a button is held
        curr = (event.x(), event.y())
        if not self.camera.contains(curr):
            self.last_pos = None
            return
        if self.last_pos is None:
            self.last_pos = event.pos()
            return

        prev = (self.last_pos.x(), self.last_pos.y())

        if event.buttons() & Qt.LeftButton:
            self.camera.rotate(prev, curr)
            self.update()
        elif event.buttons() & Qt.RightButton:
            self.camera.pan((curr[0] - prev[0], -(curr[1] - prev[1]), 0.0))
            self.update()

        self.last_pos = event.pos()

    def wheelEvent(self, event):
        if not self.pointer_inside:
            return
        delta = event.angleDelta().y()
        if delta == 0:
            return
        self.camera.zoom(delta)
        self.update()

    def reset_camera(self):
        """Reset camera to default position."""
        self.camera.reset()
        self.update()

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_R:
            self.reset_camera()
            event.accept()
        else:
            super().keyPressEvent(event)

    def cleanup(self):
        self.makeCurrent()
        self.mesh.cleanup()
        self.doneCurrent()
