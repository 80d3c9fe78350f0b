"""
Scoring: map raw metrics onto bounded 1-10 sub-scores, then combine them into
four weighted region scores and one overall PSL score.
Every sub-score is clamped to [1, 10]; weights live in config.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Tuple

import config as cfg
from .body import BodyStats, Gender
from .metrics import FaceMetrics

logger = logging.getLogger(__name__)


def clamp_score(score: float) -> float:
    return max(cfg.SCORE_MIN, min(cfg.SCORE_MAX, score))


def _distance_outside(value: float, band: Tuple[float, float]) -> float:
    low, high = band
    if value < low:
        return low - value
    if value > high:
        return value - high
    return 0.0


def _inside(value: float, band: Tuple[float, float]) -> bool:
    return band[0] <= value <= band[1]


# --- Generic helper ---

def score_ideal_range(
    value: float,
    band: Tuple[float, float],
    worst_deviation: float = cfg.IDEAL_RANGE_WORST_DEVIATION,
) -> float:
    """
    Inside the band: 8-10 by closeness to its center.
    Outside: 8 at the boundary, falling linearly to 1 at worst_deviation away.
    """
    low, high = band
    if _inside(value, band):
        center = (low + high) / 2
        half_width = (high - low) / 2
        if half_width <= 0:
            return cfg.SCORE_MAX
        return 10.0 - abs(value - center) / half_width * 2.0
    normalized = _distance_outside(value, band) / worst_deviation
    return max(1.0, min(8.0, 8.0 - normalized * 7.0))


# --- Eye area ---

def score_canthal_tilt(tilt: float) -> float:
    """Positive tilt is strongly preferred; negative tilt strongly penalized."""
    low, high = cfg.CANTHAL_TILT_RANGE
    if low <= tilt <= high:
        score = 9.0 + (1.0 - abs(tilt - cfg.CANTHAL_TILT_CENTER) / 3.0)
    elif 0 < tilt < low:
        score = 7.0 + (tilt / low) * 2.0
    elif tilt == 0:
        score = 6.0
    elif tilt > cfg.CANTHAL_TILT_NEGATIVE_DEG:
        # Also reached by tilts above the ideal band; the clamp caps those at 10
        score = 4.0 + (3.0 + tilt)
    else:
        score = max(1.0, 4.0 + tilt / 3.0)
    return clamp_score(score)


def score_ipd(ratio: float) -> float:
    """IPD as a fraction of face width."""
    band = cfg.IPD_RATIO_RANGE
    if _inside(ratio, band):
        half_width = (band[1] - band[0]) / 2
        return clamp_score(8.5 + 1.5 * (1.0 - abs(ratio - cfg.IPD_RATIO_CENTER) / half_width))
    deviation = _distance_outside(ratio, band)
    return clamp_score(max(1.0, 8.5 - deviation * cfg.IPD_PENALTY_SLOPE))


def score_brow_ridge(prominence: float) -> float:
    return clamp_score(5.0 + prominence * 5.0)


# --- Bone structure ---

def score_fwhr(value: float) -> float:
    band = cfg.FWHR_RANGE
    if _inside(value, band):
        half_width = (band[1] - band[0]) / 2
        return clamp_score(9.0 + (1.0 - abs(value - cfg.FWHR_CENTER) / half_width))
    deviation = _distance_outside(value, band)
    return clamp_score(max(1.0, 9.0 - deviation * cfg.FWHR_PENALTY_SLOPE))


def score_gonial_angle(angle: float) -> float:
    """Lower angles within the band (sharper jaw) score slightly higher."""
    low, high = cfg.GONIAL_ANGLE_RANGE
    if low <= angle <= high:
        return clamp_score(8.0 + (high - angle) / (high - low) * 2.0)
    if angle < low:
        return clamp_score(max(1.0, 8.0 - (low - angle) * cfg.GONIAL_LOW_PENALTY_SLOPE))
    return clamp_score(max(1.0, 8.0 - (angle - high) * cfg.GONIAL_HIGH_PENALTY_SLOPE))


def score_cheekbones(bizygomatic_width: float, jaw_width: float) -> float:
    """Cheekbones slightly wider than the jaw score best."""
    if jaw_width <= 0:
        return cfg.CHEEKBONE_NO_JAW_SCORE
    ratio = bizygomatic_width / jaw_width
    low, high = cfg.CHEEKBONE_RATIO_RANGE
    if low <= ratio <= high:
        half_width = (high - low) / 2
        return clamp_score(9.0 + (1.0 - abs(ratio - cfg.CHEEKBONE_RATIO_CENTER) / half_width))
    if ratio < low:
        return clamp_score(max(1.0, 9.0 - (low - ratio) * cfg.CHEEKBONE_LOW_PENALTY_SLOPE))
    return clamp_score(max(1.0, 9.0 - (ratio - high) * cfg.CHEEKBONE_HIGH_PENALTY_SLOPE))


# --- Body ---

def _bmi_range(gender: Gender) -> Tuple[float, float]:
    return cfg.BMI_RANGE_MALE if gender == Gender.MALE else cfg.BMI_RANGE_FEMALE


def score_bmi(bmi: float, gender: Gender) -> float:
    band = _bmi_range(gender)
    if _inside(bmi, band):
        return clamp_score(9.0 + (1.0 - abs(bmi - band[0]) / 3.0))
    distance = _distance_outside(bmi, band)
    penalty = (distance / cfg.BMI_PENALTY_SCALE) ** cfg.BMI_PENALTY_EXPONENT * cfg.BMI_PENALTY_FACTOR
    return clamp_score(max(1.0, 9.0 - penalty))


def score_waist_to_shoulder(ratio: float, gender: Gender) -> float:
    """Men get extra credit below the ideal ratio (V-taper)."""
    ideal = cfg.WAIST_TO_SHOULDER_MALE if gender == Gender.MALE else cfg.WAIST_TO_SHOULDER_FEMALE
    if gender == Gender.MALE and ratio < ideal:
        return clamp_score(min(10.0, 8.0 + (ideal - ratio) * cfg.WAIST_TO_SHOULDER_REWARD_SLOPE))
    deviation = abs(ratio - ideal)
    return clamp_score(max(1.0, 10.0 - deviation * cfg.WAIST_TO_SHOULDER_PENALTY_SLOPE))


# --- Result types ---

@dataclass(frozen=True)
class EyeAreaScore:
    total: float
    canthal_tilt: float
    ipd: float
    brow_ridge: float


@dataclass(frozen=True)
class BoneStructureScore:
    total: float
    fwhr: float
    gonial_angle: float
    cheekbone: float


@dataclass(frozen=True)
class SymmetryScore:
    total: float
    eye: float
    jaw: float
    overall: float


@dataclass(frozen=True)
class SoftmaxScore:
    total: float
    bmi: float
    waist_to_shoulder: float
    skin_texture: float


class ScoreCategory(str, Enum):
    BELOW_AVERAGE = "Below Average"
    AVERAGE = "Average"
    ABOVE_AVERAGE = "Above Average"
    ATTRACTIVE = "Attractive"
    MODEL_TIER = "Model Tier"


SCORE_CATEGORY_DESCRIPTIONS = {
    ScoreCategory.BELOW_AVERAGE: "Significant room for improvement with softmaxxing",
    ScoreCategory.AVERAGE: "Average appearance with good improvement potential",
    ScoreCategory.ABOVE_AVERAGE: "Above average - fine-tuning will yield results",
    ScoreCategory.ATTRACTIVE: "Attractive - optimization for marginal gains",
    ScoreCategory.MODEL_TIER: "Elite tier - maintenance focused",
}


def score_category(score: float) -> ScoreCategory:
    if score < cfg.TIER_BELOW_AVERAGE:
        return ScoreCategory.BELOW_AVERAGE
    if score < cfg.TIER_AVERAGE:
        return ScoreCategory.AVERAGE
    if score < cfg.TIER_ABOVE_AVERAGE:
        return ScoreCategory.ABOVE_AVERAGE
    if score < cfg.TIER_ATTRACTIVE:
        return ScoreCategory.ATTRACTIVE
    return ScoreCategory.MODEL_TIER


@dataclass(frozen=True)
class ScanResult:
    overall: float
    potential_max: float
    eye_area: EyeAreaScore
    bone_structure: BoneStructureScore
    symmetry: SymmetryScore
    softmax: SoftmaxScore

    @property
    def score_category(self) -> ScoreCategory:
        return score_category(self.overall)

    @property
    def improvement_potential(self) -> float:
        return self.potential_max - self.overall

    def region_scores(self) -> Dict[str, float]:
        return {
            "eye_area": self.eye_area.total,
            "bone_structure": self.bone_structure.total,
            "symmetry": self.symmetry.total,
            "softmax": self.softmax.total,
        }

    def to_dict(self) -> dict:
        out = asdict(self)
        out["score_category"] = self.score_category.value
        out["score_category_description"] = SCORE_CATEGORY_DESCRIPTIONS[self.score_category]
        out["improvement_potential"] = self.improvement_potential
        return out


# --- Region aggregation ---

def eye_area_score(metrics: FaceMetrics) -> EyeAreaScore:
    canthal = score_canthal_tilt(metrics.average_canthal_tilt)
    ipd = score_ipd(metrics.ipd_ratio)
    brow = score_brow_ridge(metrics.brow_ridge_prominence)
    total = (
        cfg.WEIGHT_EYE_CANTHAL * canthal
        + cfg.WEIGHT_EYE_IPD * ipd
        + cfg.WEIGHT_EYE_BROW * brow
    )
    return EyeAreaScore(total=clamp_score(total), canthal_tilt=canthal, ipd=ipd, brow_ridge=brow)


def bone_structure_score(metrics: FaceMetrics) -> BoneStructureScore:
    fwhr = score_fwhr(metrics.fwhr)
    gonial = score_gonial_angle(metrics.gonial_angle)
    cheekbone = score_cheekbones(metrics.bizygomatic_width, metrics.jaw_width)
    total = (
        cfg.WEIGHT_BONE_FWHR * fwhr
        + cfg.WEIGHT_BONE_GONIAL * gonial
        + cfg.WEIGHT_BONE_CHEEKBONE * cheekbone
    )
    return BoneStructureScore(
        total=clamp_score(total), fwhr=fwhr, gonial_angle=gonial, cheekbone=cheekbone
    )


def symmetry_region_score(metrics: FaceMetrics) -> SymmetryScore:
    eye = clamp_score(metrics.eye_symmetry * 10)
    jaw = clamp_score(metrics.jaw_symmetry * 10)
    overall = clamp_score(metrics.overall_symmetry * 10)
    total = (
        cfg.WEIGHT_SYM_EYE * eye
        + cfg.WEIGHT_SYM_JAW * jaw
        + cfg.WEIGHT_SYM_OVERALL * overall
    )
    return SymmetryScore(total=clamp_score(total), eye=eye, jaw=jaw, overall=overall)


def softmax_score(
    body: BodyStats,
    skin_texture_score: float = cfg.SKIN_TEXTURE_DEFAULT,
) -> SoftmaxScore:
    bmi = score_bmi(body.bmi, body.gender)
    waist = score_waist_to_shoulder(body.waist_to_shoulder_ratio, body.gender)
    skin = clamp_score(skin_texture_score)
    total = (
        cfg.WEIGHT_BODY_BMI * bmi
        + cfg.WEIGHT_BODY_WAIST * waist
        + cfg.WEIGHT_BODY_SKIN * skin
    )
    return SoftmaxScore(total=clamp_score(total), bmi=bmi, waist_to_shoulder=waist, skin_texture=skin)


def weighted_overall(
    eye: EyeAreaScore,
    bone: BoneStructureScore,
    symmetry: SymmetryScore,
    softmax: SoftmaxScore,
) -> float:
    """Weighted region sum, before clamping."""
    return (
        cfg.WEIGHT_EYE_AREA * eye.total
        + cfg.WEIGHT_BONE_STRUCTURE * bone.total
        + cfg.WEIGHT_SYMMETRY * symmetry.total
        + cfg.WEIGHT_SOFTMAX * softmax.total
    )


def potential_max(overall: float, bmi_score: float, skin_score: float) -> float:
    """
    Project the overall score if BMI and skin reached their targets, holding
    face structure fixed. A sub-score already above its target counts
    against the other. Never below the current score; capped for realism.
    """
    bmi_delta = (cfg.POTENTIAL_BMI_TARGET - bmi_score) * cfg.WEIGHT_BODY_BMI * cfg.WEIGHT_SOFTMAX
    skin_delta = (cfg.POTENTIAL_SKIN_TARGET - skin_score) * cfg.WEIGHT_BODY_SKIN * cfg.WEIGHT_SOFTMAX
    projected = min(cfg.POTENTIAL_MAX_CAP, overall + bmi_delta + skin_delta)
    return max(overall, projected)


def score_face(
    metrics: FaceMetrics,
    body: BodyStats,
    skin_texture_score: float = cfg.SKIN_TEXTURE_DEFAULT,
) -> ScanResult:
    """Score one analysis: four regions, overall PSL score and potential max."""
    eye = eye_area_score(metrics)
    bone = bone_structure_score(metrics)
    symmetry = symmetry_region_score(metrics)
    softmax = softmax_score(body, skin_texture_score)

    overall = clamp_score(weighted_overall(eye, bone, symmetry, softmax))
    potential = clamp_score(potential_max(overall, softmax.bmi, softmax.skin_texture))
    logger.debug(
        "Scored face: eye=%.2f bone=%.2f sym=%.2f body=%.2f overall=%.2f potential=%.2f",
        eye.total, bone.total, symmetry.total, softmax.total, overall, potential,
    )
    return ScanResult(
        overall=overall,
        potential_max=potential,
        eye_area=eye,
        bone_structure=bone,
        symmetry=symmetry,
        softmax=softmax,
    )
