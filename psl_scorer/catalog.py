"""
Routine catalog: static improvement routines keyed by title.
Loaded once from JSON and never mutated; recommendation rules only select from it.
"""

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Tuple

import config as cfg
from .errors import CatalogError, UnknownRoutineError

DEFAULT_CATALOG_PATH = os.path.join(os.path.dirname(__file__), "data", cfg.CATALOG_FILENAME)


class RecommendationCategory(str, Enum):
    EYE_AREA = "eye_area"
    JAWLINE = "jawline"
    SKINCARE = "skincare"
    GROOMING = "grooming"
    FITNESS = "fitness"
    POSTURE = "posture"
    SLEEP = "sleep"
    NUTRITION = "nutrition"
    LIFESTYLE = "lifestyle"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """0 for critical ... 3 for low; sort ascending to get critical first."""
        return PRIORITY_RANK[self]


class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    CHALLENGING = "challenging"
    ADVANCED = "advanced"


PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}

CATEGORY_LABELS = {
    RecommendationCategory.EYE_AREA: "Eye Area",
    RecommendationCategory.JAWLINE: "Jawline",
    RecommendationCategory.SKINCARE: "Skincare",
    RecommendationCategory.GROOMING: "Grooming",
    RecommendationCategory.FITNESS: "Fitness",
    RecommendationCategory.POSTURE: "Posture",
    RecommendationCategory.SLEEP: "Sleep & Recovery",
    RecommendationCategory.NUTRITION: "Nutrition",
    RecommendationCategory.LIFESTYLE: "Lifestyle",
}

CATEGORY_ICONS = {
    RecommendationCategory.EYE_AREA: "eye",
    RecommendationCategory.JAWLINE: "face.smiling",
    RecommendationCategory.SKINCARE: "drop",
    RecommendationCategory.GROOMING: "scissors",
    RecommendationCategory.FITNESS: "figure.walk",
    RecommendationCategory.POSTURE: "figure.stand",
    RecommendationCategory.SLEEP: "moon.zzz",
    RecommendationCategory.NUTRITION: "leaf",
    RecommendationCategory.LIFESTYLE: "star",
}

CATEGORY_COLORS = {
    RecommendationCategory.EYE_AREA: "cyan",
    RecommendationCategory.JAWLINE: "blue",
    RecommendationCategory.SKINCARE: "pink",
    RecommendationCategory.GROOMING: "orange",
    RecommendationCategory.FITNESS: "red",
    RecommendationCategory.POSTURE: "purple",
    RecommendationCategory.SLEEP: "indigo",
    RecommendationCategory.NUTRITION: "green",
    RecommendationCategory.LIFESTYLE: "yellow",
}

DIFFICULTY_TIMEFRAMES = {
    Difficulty.EASY: "1-2 weeks",
    Difficulty.MODERATE: "1-3 months",
    Difficulty.CHALLENGING: "3-6 months",
    Difficulty.ADVANCED: "6+ months",
}


def category_label(category: RecommendationCategory) -> str:
    return CATEGORY_LABELS[RecommendationCategory(category)]


def category_icon(category: RecommendationCategory) -> str:
    return CATEGORY_ICONS[RecommendationCategory(category)]


def category_color(category: RecommendationCategory) -> str:
    return CATEGORY_COLORS[RecommendationCategory(category)]


def difficulty_timeframe(difficulty: Difficulty) -> str:
    return DIFFICULTY_TIMEFRAMES[Difficulty(difficulty)]


@dataclass(frozen=True)
class RecommendationEntry:
    title: str
    description: str
    category: RecommendationCategory
    priority: Priority
    target_metric: str
    expected_improvement: float = 0.5
    instructions: Tuple[str, ...] = field(default_factory=tuple)
    tips: Tuple[str, ...] = field(default_factory=tuple)
    difficulty: Difficulty = Difficulty.MODERATE

    @classmethod
    def from_dict(cls, data: dict) -> "RecommendationEntry":
        try:
            return cls(
                title=str(data["title"]),
                description=str(data["description"]),
                category=RecommendationCategory(data["category"]),
                priority=Priority(data["priority"]),
                target_metric=str(data["target_metric"]),
                expected_improvement=float(data.get("expected_improvement", 0.5)),
                instructions=tuple(str(s) for s in data.get("instructions") or []),
                tips=tuple(str(s) for s in data.get("tips") or []),
                difficulty=Difficulty(data.get("difficulty", Difficulty.MODERATE.value)),
            )
        except (KeyError, TypeError, ValueError) as e:
            name = data.get("title", "?") if isinstance(data, dict) else "?"
            raise CatalogError(f"Invalid routine entry {name!r}: {e}") from e

    def to_dict(self) -> dict:
        """JSON-safe dict (native Python types only)."""
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "category_label": category_label(self.category),
            "category_icon": category_icon(self.category),
            "category_color": category_color(self.category),
            "priority": self.priority.value,
            "difficulty": self.difficulty.value,
            "timeframe": difficulty_timeframe(self.difficulty),
            "target_metric": self.target_metric,
            "expected_improvement": self.expected_improvement,
            "instructions": list(self.instructions),
            "tips": list(self.tips),
        }


class RoutineCatalog:
    """Read-only mapping of routine title -> RecommendationEntry."""

    def __init__(self, entries):
        by_title: Dict[str, RecommendationEntry] = {}
        for entry in entries:
            if entry.title in by_title:
                raise CatalogError(f"Duplicate routine title: {entry.title!r}")
            by_title[entry.title] = entry
        self._entries = MappingProxyType(by_title)

    def __getitem__(self, title: str) -> RecommendationEntry:
        try:
            return self._entries[title]
        except KeyError:
            raise UnknownRoutineError(title) from None

    def __contains__(self, title: object) -> bool:
        return title in self._entries

    def __iter__(self) -> Iterator[RecommendationEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def titles(self) -> List[str]:
        return list(self._entries.keys())

    def get(self, title: str) -> RecommendationEntry | None:
        return self._entries.get(title)


def load_catalog(path: str | None = None) -> RoutineCatalog:
    """Load routines from JSON (the bundled catalog when path is None)."""
    path = path or DEFAULT_CATALOG_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise CatalogError(f"Cannot read routine catalog {path}: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("routines"), list):
        raise CatalogError(f"{path}: expected an object with a 'routines' list")
    if data.get("version", cfg.CATALOG_VERSION) != cfg.CATALOG_VERSION:
        raise CatalogError(f"{path}: unsupported catalog version {data.get('version')!r}")
    return RoutineCatalog(RecommendationEntry.from_dict(d) for d in data["routines"])


def export_catalog_json(catalog: RoutineCatalog) -> str:
    """All routines as pretty, key-sorted JSON (for debugging/backup)."""
    return json.dumps(
        [entry.to_dict() for entry in catalog],
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
    )
