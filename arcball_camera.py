"""
Arcball Camera Module
Maps 2D pointer drags over a viewport onto rotation, pan and zoom of a viewed
object and composes them into a single view matrix.

Matrices follow the row-vector convention (p' = p @ M, translation in the
last row), so ``scaling @ rotation @ translation`` applies scaling first and
the flattened float32 matrix is what glLoadMatrixf expects.
"""

import math
import numbers
from dataclasses import dataclass, field, replace
from typing import Sequence, Tuple

import numpy as np


NORMALIZATIONS = ('independent', 'shared')

_EPSILON = 1e-9


class ArcballError(Exception):
    """Base class for camera errors."""


class ViewportError(ArcballError, ValueError):
    """Viewport width or height is not a positive integer."""


class ConfigError(ArcballError, ValueError):
    """An ArcballConfig field holds an unusable value."""


@dataclass(frozen=True)
class ArcballConfig:
    """Camera tunables.

    pan_sensitivity divides raw pan deltas, rotate_sensitivity multiplies the
    arcball angle, and the two zoom factors are picked by the sign of the
    wheel input. normalization chooses how pixels map into the arcball disc:
    'independent' divides x by the width and y by the height (the disc becomes
    an ellipse on non-square viewports), 'shared' divides both by
    min(width, height) and keeps the disc circular.
    """
    pan_sensitivity: float = 5.0
    rotate_sensitivity: float = 2.0
    zoom_in_factor: float = 1.1
    zoom_out_factor: float = 0.9
    normalization: str = 'independent'
    clamp: bool = True
    up: Tuple[float, float, float] = (0.0, 1.0, 0.0)

    def __post_init__(self):
        for name in ('pan_sensitivity', 'rotate_sensitivity',
                     'zoom_in_factor', 'zoom_out_factor'):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a positive number, got {value!r}")
        if self.normalization not in NORMALIZATIONS:
            raise ConfigError(
                f"normalization must be one of {NORMALIZATIONS}, got {self.normalization!r}")
        if len(self.up) != 3 or np.linalg.norm(self.up) < _EPSILON:
            raise ConfigError(f"up must be a non-zero 3D vector, got {self.up!r}")


DEFAULT_CONFIG = ArcballConfig()


def _frozen(array) -> np.ndarray:
    array = np.array(array, dtype=np.float64)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class ArcballState:
    """Snapshot of the camera: pivot, viewport and the three transforms.

    Every operation returns a new state; the matrices of an existing state
    are read-only.
    """
    pivot: np.ndarray
    width: int
    height: int
    translation: np.ndarray = field(default_factory=lambda: _frozen(np.eye(4)))
    rotation: np.ndarray = field(default_factory=lambda: _frozen(np.eye(4)))
    scaling: np.ndarray = field(default_factory=lambda: _frozen(np.eye(4)))


# --- matrix helpers -------------------------------------------------------

def translation_matrix(offset: Sequence[float]) -> np.ndarray:
    m = np.eye(4)
    m[3, :3] = offset
    return m


def look_at(eye: Sequence[float], target: Sequence[float],
            up: Sequence[float]) -> np.ndarray:
    """View matrix looking from eye toward target (camera looks down -Z)."""
    eye = np.asarray(eye, dtype=np.float64)
    z = eye - np.asarray(target, dtype=np.float64)
    z_len = np.linalg.norm(z)
    if z_len < _EPSILON:
        raise ValueError("eye and target must differ")
    z /= z_len
    x = np.cross(np.asarray(up, dtype=np.float64), z)
    x_len = np.linalg.norm(x)
    if x_len < _EPSILON:
        raise ConfigError("up vector is parallel to the viewing direction")
    x /= x_len
    y = np.cross(z, x)

    m = np.eye(4)
    m[:3, 0] = x
    m[:3, 1] = y
    m[:3, 2] = z
    m[3, :3] = (-x.dot(eye), -y.dot(eye), -z.dot(eye))
    return m


def pivot_rotation(angle: float, axis: Sequence[float],
                   pivot: Sequence[float]) -> np.ndarray:
    """Rotation of angle radians about axis through pivot.

    The sense is right-handed: a vector a rotated about cross(a, b) moves
    toward b.
    """
    k = np.asarray(axis, dtype=np.float64)
    k = k / np.linalg.norm(k)
    c, s = math.cos(angle), math.sin(angle)
    kx, ky, kz = k
    cross = np.array([[0.0, -kz, ky],
                      [kz, 0.0, -kx],
                      [-ky, kx, 0.0]])
    r = c * np.eye(3) + s * cross + (1.0 - c) * np.outer(k, k)

    m = np.eye(4)
    m[:3, :3] = r.T
    return translation_matrix(-np.asarray(pivot)) @ m @ translation_matrix(pivot)


def pivot_scaling(factor: float, pivot: Sequence[float]) -> np.ndarray:
    """Uniform scale by factor about pivot."""
    m = np.diag([factor, factor, factor, 1.0])
    return translation_matrix(-np.asarray(pivot)) @ m @ translation_matrix(pivot)


# --- pure operations ------------------------------------------------------

def _check_viewport(width, height) -> Tuple[int, int]:
    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
            raise ViewportError(f"viewport {name} must be a positive integer, got {value!r}")
    return int(width), int(height)


def initial_state(pivot: Sequence[float], width: int, height: int,
                  radius: float = 1.0,
                  config: ArcballConfig = DEFAULT_CONFIG) -> ArcballState:
    """Camera at pivot + (0, 0, radius) looking at the pivot, no rotation or zoom."""
    width, height = _check_viewport(width, height)
    if not (math.isfinite(radius) and radius > 0):
        raise ValueError(f"radius must be positive, got {radius!r}")
    pivot = _frozen(pivot)
    if pivot.shape != (3,):
        raise ValueError(f"pivot must be a 3D point, got shape {pivot.shape}")

    eye = pivot + (0.0, 0.0, radius)
    return ArcballState(
        pivot=pivot,
        width=width,
        height=height,
        translation=_frozen(look_at(eye, pivot, config.up)),
    )


def resize(state: ArcballState, width: int, height: int) -> ArcballState:
    width, height = _check_viewport(width, height)
    return replace(state, width=width, height=height)


def point_in_viewport(point: Sequence[float], width: int, height: int) -> bool:
    """True if a screen point (pixels) lies within [0, width) x [0, height)."""
    return 0 <= point[0] < width and 0 <= point[1] < height


def map_sphere_coordinate(point: Sequence[float], width: int, height: int,
                          config: ArcballConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Project a screen point (pixels, y down) onto the unit arcball hemisphere.

    Points outside the disc land on the equator (z = 0). With clamping on,
    points past the viewport edges are pulled back onto the edges first.
    """
    width, height = _check_viewport(width, height)
    px, py = float(point[0]), float(point[1])
    if config.normalization == 'shared':
        sx = sy = float(min(width, height))
    else:
        sx, sy = float(width), float(height)

    x = (2.0 * px - width) / sx
    y = -(2.0 * py - height) / sy
    if config.clamp:
        x_edge, y_edge = width / sx, height / sy
        x = min(max(x, -x_edge), x_edge)
        y = min(max(y, -y_edge), y_edge)

    r2 = x * x + y * y
    if r2 <= 1.0:
        return np.array([x, y, math.sqrt(1.0 - r2)])
    r = math.sqrt(r2)
    return np.array([x / r, y / r, 0.0])


def arcball_angle_axis(start: Sequence[float], end: Sequence[float],
                       width: int, height: int,
                       config: ArcballConfig = DEFAULT_CONFIG):
    """Scaled rotation angle (radians) and axis between two screen points.

    Returns (0.0, None) when the points give no usable rotation axis.
    """
    a = map_sphere_coordinate(start, width, height, config)
    b = map_sphere_coordinate(end, width, height, config)

    axis = np.cross(a, b)
    if np.linalg.norm(axis) < _EPSILON:
        return 0.0, None

    cos_angle = a.dot(b) / (np.linalg.norm(a) * np.linalg.norm(b))
    angle = math.acos(min(max(cos_angle, -1.0), 1.0))
    if angle < _EPSILON:
        return 0.0, None
    return angle * config.rotate_sensitivity, axis


def pan(state: ArcballState, delta: Sequence[float],
        config: ArcballConfig = DEFAULT_CONFIG) -> ArcballState:
    offset = np.asarray(delta, dtype=np.float64) / config.pan_sensitivity
    return replace(state, translation=_frozen(state.translation @ translation_matrix(offset)))


def rotate(state: ArcballState, start: Sequence[float], end: Sequence[float],
           config: ArcballConfig = DEFAULT_CONFIG) -> ArcballState:
    angle, axis = arcball_angle_axis(start, end, state.width, state.height, config)
    if axis is None:
        return state
    step = pivot_rotation(angle, axis, state.pivot)
    return replace(state, rotation=_frozen(state.rotation @ step))


def zoom(state: ArcballState, amount: float,
         config: ArcballConfig = DEFAULT_CONFIG) -> ArcballState:
    """Only the sign of amount matters; non-positive zooms out."""
    factor = config.zoom_in_factor if amount > 0 else config.zoom_out_factor
    step = pivot_scaling(factor, state.pivot)
    return replace(state, scaling=_frozen(state.scaling @ step))


def view_matrix(state: ArcballState) -> np.ndarray:
    return state.scaling @ state.rotation @ state.translation


# --- stateful facade ------------------------------------------------------

class ArcballCamera:
    """Arcball camera driven by pointer events.

    Holds the current ArcballState and swaps it for the result of each
    operation.
    """

    def __init__(self, pivot, width, height, radius=1.0, config=DEFAULT_CONFIG):
        self.config = config
        self.radius = radius
        self._state = initial_state(pivot, width, height, radius, config)

    def reset(self, radius=None):
        """Return to the default position, keeping pivot and viewport."""
        if radius is not None:
            self.radius = radius
        self._state = initial_state(self._state.pivot, self._state.width,
                                    self._state.height, self.radius, self.config)

    def pan(self, delta):
        self._state = pan(self._state, delta, self.config)

    def rotate(self, start, end):
        self._state = rotate(self._state, start, end, self.config)

    def zoom(self, amount):
        self._state = zoom(self._state, amount, self.config)

    def resize(self, width, height):
        self._state = resize(self._state, width, height)

    def contains(self, point):
        return point_in_viewport(point, self._state.width, self._state.height)

    def map_sphere_coordinate(self, point):
        return map_sphere_coordinate(point, self._state.width, self._state.height, self.config)

    @property
    def state(self) -> ArcballState:
        return self._state

    @property
    def pivot(self):
        return self._state.pivot

    @property
    def width(self):
        return self._state.width

    @property
    def height(self):
        return self._state.height

    @property
    def translation(self):
        return self._state.translation

    @property
    def rotation(self):
        return self._state.rotation

    @property
    def scaling(self):
        return self._state.scaling

    @property
    def view_matrix(self) -> np.ndarray:
        return view_matrix(self._state)

    def gl_matrix(self) -> np.ndarray:
        """View matrix as contiguous float32, ready for glLoadMatrixf."""
        return np.ascontiguousarray(self.view_matrix, dtype=np.float32)
