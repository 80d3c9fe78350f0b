"""
Orchestration: landmarks -> key points -> metrics -> scores -> recommendations.
One FaceAnalyzer can serve any number of scans; it holds only the catalog and
the skin-texture stub value.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Tuple

import config as cfg
from .body import BodyStats
from .catalog import RecommendationEntry, RoutineCatalog, load_catalog
from .keypoints import KeyPoints, LandmarkRegions, extract_key_points, load_landmarks
from .metrics import FaceMetrics, compute_face_metrics
from .recommendations import RecommendationSelector
from .scoring import ScanResult, score_face, score_ideal_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanReport:
    key_points: KeyPoints
    metrics: FaceMetrics
    result: ScanResult
    recommendations: List[RecommendationEntry]
    midface_score: float

    def to_dict(self) -> dict:
        return {
            "metrics": self.metrics.to_dict(),
            "scores": self.result.to_dict(),
            "midface_score": self.midface_score,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


class FaceAnalyzer:
    """Runs the full scoring pipeline for one landmark set at a time."""

    def __init__(
        self,
        catalog: RoutineCatalog | None = None,
        skin_texture_score: float = cfg.SKIN_TEXTURE_DEFAULT,
    ):
        self.catalog = catalog if catalog is not None else load_catalog()
        self.skin_texture_score = skin_texture_score
        self._selector = RecommendationSelector(self.catalog)

    def analyze(self, regions: LandmarkRegions, body: BodyStats) -> ScanReport:
        """Raises MissingLandmarksError when a required region is absent."""
        key_points = extract_key_points(regions)
        metrics = compute_face_metrics(key_points)
        result = score_face(metrics, body, self.skin_texture_score)
        recommendations = self._selector.select(result, body)
        midface = score_ideal_range(metrics.midface_ratio, cfg.MIDFACE_RATIO_RANGE)
        logger.info(
            "Scan complete: overall=%.2f potential=%.2f (%s), %d recommendations",
            result.overall,
            result.potential_max,
            result.score_category.value,
            len(recommendations),
        )
        return ScanReport(
            key_points=key_points,
            metrics=metrics,
            result=result,
            recommendations=recommendations,
            midface_score=midface,
        )

    def analyze_file(self, path: str, body: BodyStats) -> ScanReport:
        return self.analyze(load_landmarks(path), body)


def rank_scans(
    paths: List[str],
    body: BodyStats,
    analyzer: FaceAnalyzer | None = None,
    top_k: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> List[Tuple[str, ScanReport]]:
    """
    Score several landmark files for the same person and rank them by overall
    score, best first. Files missing required regions are skipped (logged).
    """
    if analyzer is None:
        analyzer = FaceAnalyzer()
    total = len(paths)
    scored: List[Tuple[str, ScanReport]] = []
    for i, path in enumerate(paths):
        if os.path.isfile(path):
            try:
                scored.append((path, analyzer.analyze_file(path, body)))
            except (KeyError, ValueError) as e:
                # MissingLandmarksError is a KeyError; bad JSON is a ValueError
                logger.warning("Skipping %s: %s", path, e)
        if progress_callback and total:
            progress_callback(i + 1, total)

    scored.sort(key=lambda x: x[1].result.overall, reverse=True)
    if top_k is not None and top_k > 0:
        scored = scored[:top_k]
    return scored
