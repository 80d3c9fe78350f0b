"""
PSL scoring: turn facial landmarks and body stats into a 1-10 score,
region sub-scores and ranked improvement routines.
"""

from psl_scorer.analyzer import FaceAnalyzer, ScanReport, rank_scans
from psl_scorer.body import BodyStats, Gender
from psl_scorer.catalog import RecommendationEntry, RoutineCatalog, load_catalog
from psl_scorer.errors import CatalogError, MissingLandmarksError, UnknownRoutineError
from psl_scorer.keypoints import KeyPoints, extract_key_points
from psl_scorer.metrics import FaceMetrics, compute_face_metrics
from psl_scorer.recommendations import RecommendationSelector, select_recommendations
from psl_scorer.scoring import ScanResult, score_face

__all__ = [
    "BodyStats",
    "CatalogError",
    "FaceAnalyzer",
    "FaceMetrics",
    "Gender",
    "KeyPoints",
    "MissingLandmarksError",
    "RecommendationEntry",
    "RecommendationSelector",
    "RoutineCatalog",
    "ScanReport",
    "ScanResult",
    "UnknownRoutineError",
    "compute_face_metrics",
    "extract_key_points",
    "load_catalog",
    "rank_scans",
    "score_face",
    "select_recommendations",
]
