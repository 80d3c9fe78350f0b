"""
Map detector landmark regions onto a fixed set of anatomical key points.
Point order inside each region follows the upstream detector's convention;
the positional rules below (first/last eye point, contour thirds) depend on it.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

from .errors import MissingLandmarksError
from .geometry import ORIGIN, Point2D, centroid, distance, midpoint

logger = logging.getLogger(__name__)

REQUIRED_REGIONS = (
    "leftEye",
    "rightEye",
    "nose",
    "outerLips",
    "faceContour",
    "leftEyebrow",
    "rightEyebrow",
)

LandmarkRegions = Mapping[str, Sequence[Point2D]]


@dataclass(frozen=True)
class KeyPoints:
    left_pupil: Point2D
    right_pupil: Point2D
    left_inner_canthus: Point2D
    left_outer_canthus: Point2D
    right_inner_canthus: Point2D
    right_outer_canthus: Point2D
    upper_lip_center: Point2D
    left_cheekbone: Point2D
    right_cheekbone: Point2D
    left_gonion: Point2D
    right_gonion: Point2D
    chin: Point2D
    brow_center: Point2D
    nose_top: Point2D
    nose_tip: Point2D
    face_contour: Tuple[Point2D, ...]

    @property
    def ipd(self) -> float:
        """Interpupillary distance."""
        return distance(self.left_pupil, self.right_pupil)

    @property
    def face_width(self) -> float:
        """Cheekbone-to-cheekbone width."""
        return distance(self.left_cheekbone, self.right_cheekbone)

    @property
    def center_x(self) -> float:
        return (self.left_cheekbone.x + self.right_cheekbone.x) / 2


def _to_point(raw) -> Point2D:
    """Accept Point2D, (x, y) pairs or {"x": .., "y": ..} dicts."""
    if isinstance(raw, Mapping):
        return Point2D(float(raw["x"]), float(raw["y"]))
    x, y = raw[:2]
    return Point2D(float(x), float(y))


def regions_from_dict(data: Mapping) -> Dict[str, Tuple[Point2D, ...]]:
    """
    Normalize JSON-shaped landmark input into Point2D tuples per region.
    Raises ValueError naming the region when a point is malformed.
    """
    regions = {}
    for name, points in data.items():
        try:
            regions[str(name)] = tuple(_to_point(p) for p in points)
        except (KeyError, TypeError, IndexError, ValueError) as e:
            raise ValueError(f"Malformed point in landmark region {name!r}: {e!r}") from e
    return regions


def load_landmarks(path: str) -> Dict[str, Tuple[Point2D, ...]]:
    """
    Read a landmark JSON file: either the region mapping itself or
    {"landmarks": {...}} as written by the capture side.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and isinstance(data.get("landmarks"), dict):
        data = data["landmarks"]
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected an object mapping region names to points")
    return regions_from_dict(data)


def extract_key_points(regions: LandmarkRegions) -> KeyPoints:
    """
    Build KeyPoints from detector regions.
    Raises MissingLandmarksError if any required region is absent or empty.
    """
    missing = [
        name for name in REQUIRED_REGIONS
        if name not in regions or len(regions[name]) == 0
    ]
    if missing:
        raise MissingLandmarksError(missing)

    left_eye = [_to_point(p) for p in regions["leftEye"]]
    right_eye = [_to_point(p) for p in regions["rightEye"]]
    nose = [_to_point(p) for p in regions["nose"]]
    lips = [_to_point(p) for p in regions["outerLips"]]
    contour = [_to_point(p) for p in regions["faceContour"]]
    left_brow = [_to_point(p) for p in regions["leftEyebrow"]]
    right_brow = [_to_point(p) for p in regions["rightEyebrow"]]

    # Left eye runs inner -> outer, right eye outer -> inner
    left_inner, left_outer = left_eye[0], left_eye[-1]
    right_outer, right_inner = right_eye[0], right_eye[-1]

    # Widest contour points stand in for the zygomatic arch
    left_cheekbone = min(contour, key=lambda p: p.x)
    right_cheekbone = max(contour, key=lambda p: p.x)

    # Gonion approximation: ends of the first third of the contour
    jaw = contour[: len(contour) // 3]
    left_gonion = jaw[0] if jaw else ORIGIN
    right_gonion = jaw[-1] if jaw else ORIGIN

    key_points = KeyPoints(
        left_pupil=centroid(left_eye),
        right_pupil=centroid(right_eye),
        left_inner_canthus=left_inner,
        left_outer_canthus=left_outer,
        right_inner_canthus=right_inner,
        right_outer_canthus=right_outer,
        upper_lip_center=lips[len(lips) // 2],
        left_cheekbone=left_cheekbone,
        right_cheekbone=right_cheekbone,
        left_gonion=left_gonion,
        right_gonion=right_gonion,
        chin=contour[len(contour) // 2],
        brow_center=midpoint(centroid(left_brow), centroid(right_brow)),
        nose_top=nose[0],
        nose_tip=nose[-1] if len(nose) > 1 else ORIGIN,
        face_contour=tuple(contour),
    )
    logger.debug(
        "Extracted key points: ipd=%.4f face_width=%.4f contour=%d",
        key_points.ipd,
        key_points.face_width,
        len(contour),
    )
    return key_points
