"""
Raw facial measurements and ratios computed from KeyPoints.
Lengths are in the input's units; ratios are unit-free.
"""

from dataclasses import asdict, dataclass
from enum import Enum

import config as cfg
from .geometry import (
    Point2D,
    angle_between,
    canthal_tilt,
    distance,
    midpoint,
    symmetry_score,
)
from .keypoints import KeyPoints


class CanthalTiltCategory(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


CANTHAL_TILT_LABELS = {
    CanthalTiltCategory.POSITIVE: "Positive (Hunter Eyes)",
    CanthalTiltCategory.NEUTRAL: "Neutral",
    CanthalTiltCategory.NEGATIVE: "Negative (Droopy)",
}


@dataclass(frozen=True)
class FaceMetrics:
    ipd: float = 0.0
    ipd_ratio: float = 0.0
    midface_length: float = 0.0
    midface_ratio: float = 0.0
    bizygomatic_width: float = 0.0
    upper_face_height: float = 0.0
    gonial_angle: float = 120.0
    jaw_width: float = 0.0
    face_height: float = 0.0
    left_canthal_tilt: float = 0.0
    right_canthal_tilt: float = 0.0
    eye_spacing: float = 0.0
    brow_ridge_prominence: float = 0.0
    nose_length: float = 0.0
    # No landmarks for these yet
    nose_width: float = 0.0
    nasal_bridge_height: float = 0.0
    lip_width: float = 0.0
    upper_lip_height: float = 0.0
    lower_lip_height: float = 0.0
    mouth_to_jaw_distance: float = 0.0
    eye_symmetry: float = 1.0
    jaw_symmetry: float = 1.0
    overall_symmetry: float = 1.0

    @property
    def fwhr(self) -> float:
        """Facial width-to-height ratio; 0 when the upper face has no height."""
        if self.upper_face_height <= 0:
            return 0.0
        return self.bizygomatic_width / self.upper_face_height

    @property
    def average_canthal_tilt(self) -> float:
        return (self.left_canthal_tilt + self.right_canthal_tilt) / 2.0

    @property
    def canthal_tilt_category(self) -> CanthalTiltCategory:
        avg = self.average_canthal_tilt
        if avg > cfg.CANTHAL_TILT_POSITIVE_DEG:
            return CanthalTiltCategory.POSITIVE
        if avg < cfg.CANTHAL_TILT_NEGATIVE_DEG:
            return CanthalTiltCategory.NEGATIVE
        return CanthalTiltCategory.NEUTRAL

    def to_dict(self) -> dict:
        out = asdict(self)
        out["fwhr"] = self.fwhr
        out["average_canthal_tilt"] = self.average_canthal_tilt
        out["canthal_tilt_category"] = self.canthal_tilt_category.value
        out["canthal_tilt_label"] = CANTHAL_TILT_LABELS[self.canthal_tilt_category]
        return out


def midface_ratio(left_pupil: Point2D, right_pupil: Point2D, upper_lip: Point2D) -> float:
    """Vertical pupil-line-to-lip distance over IPD (ideal 1.0)."""
    ipd = distance(left_pupil, right_pupil)
    if ipd <= 0:
        return 0.0
    return abs(midpoint(left_pupil, right_pupil).y - upper_lip.y) / ipd


def fwhr(
    left_cheekbone: Point2D,
    right_cheekbone: Point2D,
    brow_center: Point2D,
    upper_lip: Point2D,
) -> float:
    """Bizygomatic width over brow-to-lip height (ideal 1.9-2.2)."""
    height = abs(brow_center.y - upper_lip.y)
    if height <= 0:
        return 0.0
    return distance(left_cheekbone, right_cheekbone) / height


def ipd_ratio(left_pupil: Point2D, right_pupil: Point2D, face_width: float) -> float:
    if face_width <= 0:
        return 0.0
    return distance(left_pupil, right_pupil) / face_width


def gonial_angle(ear: Point2D, gonion: Point2D, chin: Point2D) -> float:
    """Jaw angle at the gonion between the ear and chin rays, in degrees."""
    return angle_between(gonion, ear, chin)


def compute_face_metrics(kp: KeyPoints) -> FaceMetrics:
    """Measure every ratio, angle and symmetry score for one set of key points."""
    ipd = kp.ipd
    face_width = kp.face_width
    center_x = kp.center_x
    mid_ratio = midface_ratio(kp.left_pupil, kp.right_pupil, kp.upper_lip_center)

    eye_sym = symmetry_score(
        [kp.left_inner_canthus, kp.left_outer_canthus, kp.left_pupil],
        [kp.right_inner_canthus, kp.right_outer_canthus, kp.right_pupil],
        center_x,
    )
    jaw_sym = symmetry_score([kp.left_gonion], [kp.right_gonion], center_x)

    # Left half of the contour against the mirrored right half
    half = len(kp.face_contour) // 2
    left_half = list(kp.face_contour[:half])
    right_half = list(reversed(kp.face_contour[len(kp.face_contour) - half:])) if half else []
    overall_sym = symmetry_score(left_half, right_half, center_x)

    brow_to_eye = abs(kp.brow_center.y - kp.left_pupil.y)

    return FaceMetrics(
        ipd=ipd,
        ipd_ratio=ipd_ratio(kp.left_pupil, kp.right_pupil, face_width),
        midface_length=mid_ratio * ipd,
        midface_ratio=mid_ratio,
        bizygomatic_width=face_width,
        upper_face_height=abs(kp.brow_center.y - kp.upper_lip_center.y),
        # The cheekbone stands in for an ear landmark the detector lacks
        gonial_angle=gonial_angle(kp.left_cheekbone, kp.left_gonion, kp.chin),
        jaw_width=distance(kp.left_gonion, kp.right_gonion),
        face_height=abs(kp.brow_center.y - kp.chin.y),
        left_canthal_tilt=canthal_tilt(kp.left_inner_canthus, kp.left_outer_canthus),
        right_canthal_tilt=canthal_tilt(kp.right_inner_canthus, kp.right_outer_canthus),
        eye_spacing=distance(kp.left_inner_canthus, kp.right_inner_canthus),
        brow_ridge_prominence=min(1.0, brow_to_eye / cfg.BROW_RIDGE_NORMALIZER),
        nose_length=distance(kp.nose_top, kp.nose_tip),
        mouth_to_jaw_distance=abs(kp.upper_lip_center.y - kp.chin.y),
        eye_symmetry=eye_sym,
        jaw_symmetry=jaw_sym,
        overall_symmetry=overall_sym,
    )
