"""
2D geometry over landmark points: distances, angles, symmetry variance.
All functions are pure and never raise on degenerate input.
"""

import math
from typing import NamedTuple, Sequence

import numpy as np

import config as cfg


class Point2D(NamedTuple):
    x: float
    y: float


ORIGIN = Point2D(0.0, 0.0)


def distance(a: Point2D, b: Point2D) -> float:
    """Euclidean distance."""
    return float(math.hypot(b[0] - a[0], b[1] - a[1]))


def midpoint(a: Point2D, b: Point2D) -> Point2D:
    return Point2D((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def centroid(points: Sequence[Point2D]) -> Point2D:
    """Arithmetic mean of the points; the origin for an empty sequence."""
    if len(points) == 0:
        return ORIGIN
    arr = np.asarray(points, dtype=np.float64)
    cx, cy = arr.mean(axis=0)
    return Point2D(float(cx), float(cy))


def angle_between(vertex: Point2D, p1: Point2D, p2: Point2D) -> float:
    """
    Angle in degrees at vertex between the rays vertex->p1 and vertex->p2.
    Returns 0 when either ray has zero length.
    """
    v1 = np.array([p1[0] - vertex[0], p1[1] - vertex[1]], dtype=np.float64)
    v2 = np.array([p2[0] - vertex[0], p2[1] - vertex[1]], dtype=np.float64)
    n1 = np.linalg.norm(v1)
    n2 = np.linalg.norm(v2)
    if n1 <= 0 or n2 <= 0:
        return 0.0
    cos_angle = float(np.clip(np.dot(v1, v2) / (n1 * n2), -1.0, 1.0))
    return math.degrees(math.acos(cos_angle))


def canthal_tilt(inner: Point2D, outer: Point2D) -> float:
    """
    Tilt of the inner->outer canthus line in degrees; positive when the outer
    corner sits higher. Y grows downward, so dy is negated. A vertical pair
    (same x) gives 0.
    """
    dx = outer[0] - inner[0]
    dy = outer[1] - inner[1]
    if dx == 0:
        return 0.0
    return math.degrees(math.atan2(-dy, dx))


def symmetry_score(
    left_points: Sequence[Point2D],
    right_points: Sequence[Point2D],
    center_x: float,
) -> float:
    """
    Compare mirrored point pairs around a vertical centerline.
    Per pair: |dist_left - dist_right| to the centerline plus the vertical offset.
    Score = exp(-k * mean variance) in [0, 1]; 1.0 for empty or mismatched input.
    """
    if len(left_points) != len(right_points) or len(left_points) == 0:
        return 1.0
    left = np.asarray(left_points, dtype=np.float64)
    right = np.asarray(right_points, dtype=np.float64)
    horizontal = np.abs(np.abs(left[:, 0] - center_x) - np.abs(right[:, 0] - center_x))
    vertical = np.abs(left[:, 1] - right[:, 1])
    avg_variance = float(np.mean(horizontal + vertical))
    score = math.exp(-cfg.SYMMETRY_DECAY * avg_variance)
    return max(0.0, min(1.0, score))
