from __future__ import annotations

import json
from pathlib import Path

import pytest

from psl_scorer.body import BodyStats, Gender
from psl_scorer.catalog import load_catalog


def _mirrored_face() -> dict:
    """Left/right mirrored around x=100, image coordinates (y down)."""
    return {
        # Subject's left eye sits on the image right; inner -> outer
        "leftEye": [[120, 100], [125, 97], [130, 96], [135, 97], [140, 98]],
        # Subject's right eye on the image left; outer -> inner
        "rightEye": [[60, 98], [65, 97], [70, 96], [75, 97], [80, 100]],
        "nose": [[100, 100], [100, 120], [100, 135]],
        "outerLips": [[80, 160], [90, 157], [100, 158], [110, 157], [120, 160]],
        "faceContour": [
            [40, 100], [45, 140], [60, 175], [80, 195], [100, 200],
            [120, 195], [140, 175], [155, 140], [160, 100],
        ],
        "leftEyebrow": [[120, 80], [130, 77], [140, 80]],
        "rightEyebrow": [[60, 80], [70, 77], [80, 80]],
    }


@pytest.fixture
def landmarks() -> dict:
    return _mirrored_face()


@pytest.fixture
def jaw_landmarks(landmarks) -> dict:
    """Contour starting at the jaw corner, so the gonion is not the cheekbone."""
    landmarks["faceContour"] = [
        [45, 175], [40, 110], [70, 190], [85, 197], [100, 200],
        [115, 197], [130, 190], [160, 110], [155, 175],
    ]
    return landmarks


@pytest.fixture
def landmark_file(tmp_path: Path, landmarks) -> Path:
    path = tmp_path / "scan.json"
    path.write_text(json.dumps({"landmarks": landmarks}), encoding="utf-8")
    return path


@pytest.fixture
def body() -> BodyStats:
    # BMI ~24.1, waist/shoulder 0.64
    return BodyStats(height_cm=180, weight_kg=78, waist_cm=80, shoulder_cm=125, gender=Gender.MALE)


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()
