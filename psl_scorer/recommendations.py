"""
Rule-based recommendation selection over a completed ScanResult.
Rules emit routine titles in a fixed order; the selector resolves them against
the catalog and stable-sorts by priority (critical first). No deduplication:
a weakness that trips two rules yields both sets of routines.
"""

import logging
from typing import List

import config as cfg
from .body import BodyStats
from .catalog import RecommendationEntry, RoutineCatalog
from .scoring import ScanResult

logger = logging.getLogger(__name__)

EYE_ROUTINES = ["Eyebrow Grooming", "Sleep Optimization", "Under-Eye Care"]
BROW_ROUTINES = ["Brow Ridge Enhancement"]
JAW_ROUTINES = ["Mewing Technique", "Chewing Exercises", "Jaw Resistance Training"]
CHEEKBONE_ROUTINES = ["Facial Massage & Gua Sha"]
FAT_LOSS_ROUTINES = ["Fat Loss Protocol"]
MUSCLE_GAIN_ROUTINES = ["Lean Muscle Building"]
V_TAPER_ROUTINES = ["V-Taper Development"]
SKIN_ROUTINES = ["Core Skincare Protocol", "Hydration Optimization"]
ALWAYS_ROUTINES = ["Posture Correction", "Hair Optimization"]


def select_recommendation_ids(result: ScanResult, body: BodyStats) -> List[str]:
    """Routine titles triggered by the result, in rule (emission) order."""
    ids: List[str] = []

    eye = result.eye_area
    if eye.canthal_tilt < cfg.REC_CANTHAL_TILT_BELOW:
        ids.extend(EYE_ROUTINES)
    if eye.brow_ridge < cfg.REC_BROW_RIDGE_BELOW:
        ids.extend(BROW_ROUTINES)

    bone = result.bone_structure
    if bone.gonial_angle < cfg.REC_JAW_BELOW or bone.fwhr < cfg.REC_JAW_BELOW:
        ids.extend(JAW_ROUTINES)
    if bone.cheekbone < cfg.REC_CHEEKBONE_BELOW:
        ids.extend(CHEEKBONE_ROUTINES)

    softmax = result.softmax
    if softmax.bmi < cfg.REC_BMI_BELOW:
        bmi = body.bmi
        if bmi > cfg.BMI_OVERWEIGHT:
            ids.extend(FAT_LOSS_ROUTINES)
        elif bmi < cfg.BMI_UNDERWEIGHT:
            ids.extend(MUSCLE_GAIN_ROUTINES)
    if softmax.waist_to_shoulder < cfg.REC_WAIST_BELOW:
        ids.extend(V_TAPER_ROUTINES)
    if softmax.skin_texture < cfg.REC_SKIN_BELOW:
        ids.extend(SKIN_ROUTINES)

    ids.extend(ALWAYS_ROUTINES)
    return ids


class RecommendationSelector:
    """Holds the (immutable) catalog; selection itself is stateless."""

    def __init__(self, catalog: RoutineCatalog):
        self.catalog = catalog

    def select(self, result: ScanResult, body: BodyStats) -> List[RecommendationEntry]:
        """
        Resolve triggered routines against the catalog, critical first.
        Raises UnknownRoutineError if the catalog lacks a triggered title.
        """
        entries = [self.catalog[rid] for rid in select_recommendation_ids(result, body)]
        # sorted() is stable: equal priorities keep emission order
        ranked = sorted(entries, key=lambda e: e.priority.rank)
        logger.debug("Selected %d recommendations: %s", len(ranked), [e.title for e in ranked])
        return ranked


def select_recommendations(
    result: ScanResult,
    body: BodyStats,
    catalog: RoutineCatalog,
) -> List[RecommendationEntry]:
    return RecommendationSelector(catalog).select(result, body)
