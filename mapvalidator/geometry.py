"""2D vector helpers used by the geometric validators."""

import numpy as np

# Vectors shorter than this have no usable direction.
ZERO_LENGTH = 1e-9


class GeometryError(ValueError):
    """Raised when a primitive is too degenerate for a geometric judgment."""

    def __init__(self, message: str, primitive_id: int | None = None):
        self.primitive_id = primitive_id
        super().__init__(message)


def midpoint_2d(points: np.ndarray, primitive_id: int | None = None) -> np.ndarray:
    """Get the mean of the first and last point, in x and y.

    Raises:
        GeometryError: If there are fewer than two points.
    """
    if len(points) < 2:
        raise GeometryError(
            f"LineString with ID {primitive_id} must have at least two points "
            "to calculate the midpoint.",
            primitive_id,
        )
    return (points[0, :2] + points[-1, :2]) / 2.0


def direction_2d(points: np.ndarray, primitive_id: int | None = None) -> np.ndarray:
    """Get the vector from the first to the last point, in x and y.

    Raises:
        GeometryError: If there are fewer than two points.
    """
    if len(points) < 2:
        raise GeometryError(
            f"LineString with ID {primitive_id} must have at least two points "
            "to calculate its direction.",
            primitive_id,
        )
    return points[-1, :2] - points[0, :2]


def _norms(a: np.ndarray, b: np.ndarray, primitive_id: int | None) -> float:
    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a < ZERO_LENGTH or norm_b < ZERO_LENGTH:
        raise GeometryError(
            f"Cannot compute an angle with a zero-length vector (ID {primitive_id}).",
            primitive_id,
        )
    return norm_a * norm_b


def sine_of_angle(
    a: np.ndarray, b: np.ndarray, primitive_id: int | None = None
) -> float:
    """Signed sine of the angle from ``a`` to ``b`` (2D cross over norms)."""
    cross = float(a[0] * b[1] - a[1] * b[0])
    return cross / _norms(a, b, primitive_id)


def cosine_of_angle(
    a: np.ndarray, b: np.ndarray, primitive_id: int | None = None
) -> float:
    """Cosine of the angle between ``a`` and ``b``."""
    return float(np.dot(a, b)) / _norms(a, b, primitive_id)


def bounding_box_2d(points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Get the (min corner, max corner) of the points in x and y."""
    xy = points[:, :2]
    return xy.min(axis=0), xy.max(axis=0)


def box_contains(box: tuple[np.ndarray, np.ndarray], point: np.ndarray) -> bool:
    """Check if a point lies inside (or on) a 2D box."""
    low, high = box
    return bool(np.all(point[:2] >= low) and np.all(point[:2] <= high))
