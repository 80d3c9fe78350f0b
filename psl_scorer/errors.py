"""Exceptions raised by the scoring core."""

from typing import Iterable


class PslScorerError(Exception):
    """Base class for psl_scorer errors."""


class MissingLandmarksError(PslScorerError, KeyError):
    """A required landmark region is absent (or has no points)."""

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"Missing landmark regions: {', '.join(self.missing)}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class CatalogError(PslScorerError):
    """Routine catalog file is unreadable or malformed."""


class UnknownRoutineError(CatalogError, KeyError):
    """A recommendation id has no entry in the catalog."""

    def __init__(self, routine_id: str):
        self.routine_id = routine_id
        super().__init__(f"Routine not found in catalog: {routine_id}")

    def __str__(self) -> str:
        return self.args[0]
