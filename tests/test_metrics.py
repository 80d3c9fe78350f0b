import math

import pytest

from psl_scorer.geometry import Point2D
from psl_scorer.keypoints import extract_key_points
from psl_scorer.metrics import (
    CanthalTiltCategory,
    FaceMetrics,
    compute_face_metrics,
    fwhr,
    gonial_angle,
    ipd_ratio,
    midface_ratio,
)


@pytest.fixture
def metrics(landmarks) -> FaceMetrics:
    return compute_face_metrics(extract_key_points(landmarks))


def test_proportions(metrics):
    assert metrics.ipd == pytest.approx(60.0)
    assert metrics.ipd_ratio == pytest.approx(0.5)
    assert metrics.bizygomatic_width == pytest.approx(120.0)
    assert metrics.upper_face_height == pytest.approx(79.0)
    assert metrics.fwhr == pytest.approx(120.0 / 79.0)
    assert metrics.midface_ratio == pytest.approx(60.4 / 60.0)
    assert metrics.midface_length == pytest.approx(60.4)


def test_lengths(metrics):
    assert metrics.jaw_width == pytest.approx(math.hypot(20, 75))
    assert metrics.face_height == pytest.approx(121.0)
    assert metrics.eye_spacing == pytest.approx(40.0)
    assert metrics.nose_length == pytest.approx(35.0)
    assert metrics.mouth_to_jaw_distance == pytest.approx(42.0)
    assert metrics.brow_ridge_prominence == pytest.approx(18.6 / 30.0)
    assert metrics.nose_width == 0.0
    assert metrics.lip_width == 0.0


def test_canthal_tilts(metrics):
    assert metrics.left_canthal_tilt == pytest.approx(math.degrees(math.atan2(2, 20)))
    # Right eye is read outer -> inner, so a mirrored layout points the other way
    assert metrics.right_canthal_tilt == pytest.approx(math.degrees(math.atan2(2, -20)))


def test_gonial_angle_uses_cheekbone_as_ear(metrics):
    # Here the left cheekbone and the left gonion are the same contour point
    assert metrics.gonial_angle == 0.0


def test_mirrored_face_symmetry(metrics):
    assert metrics.eye_symmetry == pytest.approx(1.0)
    assert metrics.overall_symmetry == pytest.approx(1.0)
    # Gonions come from the same side of the contour
    assert metrics.jaw_symmetry == pytest.approx(0.0, abs=1e-9)


def test_symmetry_drops_when_contour_skewed(landmarks):
    landmarks["faceContour"][8] = [160, 104]
    m = compute_face_metrics(extract_key_points(landmarks))
    assert 0.0 <= m.overall_symmetry < 1.0
    assert m.eye_symmetry == pytest.approx(1.0)


def test_brow_prominence_capped(landmarks):
    landmarks["leftEyebrow"] = [[120, 20], [130, 17], [140, 20]]
    landmarks["rightEyebrow"] = [[60, 20], [70, 17], [80, 20]]
    m = compute_face_metrics(extract_key_points(landmarks))
    assert m.brow_ridge_prominence == 1.0


def test_defaults():
    m = FaceMetrics()
    assert m.gonial_angle == 120.0
    assert m.eye_symmetry == m.jaw_symmetry == m.overall_symmetry == 1.0
    assert m.fwhr == 0.0


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (8.0, 6.0, CanthalTiltCategory.POSITIVE),
        (5.0, 5.0, CanthalTiltCategory.NEUTRAL),
        (-3.0, -3.0, CanthalTiltCategory.NEUTRAL),
        (-4.0, -5.0, CanthalTiltCategory.NEGATIVE),
    ],
)
def test_canthal_tilt_category(left, right, expected):
    m = FaceMetrics(left_canthal_tilt=left, right_canthal_tilt=right)
    assert m.canthal_tilt_category is expected


def test_ratio_helpers_degenerate():
    p = Point2D(10, 10)
    assert midface_ratio(p, p, Point2D(10, 50)) == 0.0
    assert fwhr(Point2D(0, 0), Point2D(100, 0), Point2D(50, 30), Point2D(50, 30)) == 0.0
    assert ipd_ratio(Point2D(0, 0), Point2D(10, 0), 0.0) == 0.0


def test_gonial_angle_helper():
    ear, gonion, chin = Point2D(0, 0), Point2D(0, 10), Point2D(10, 10)
    assert gonial_angle(ear, gonion, chin) == pytest.approx(90.0)


def test_to_dict_is_json_safe(metrics):
    d = metrics.to_dict()
    assert d["canthal_tilt_category"] in {c.value for c in CanthalTiltCategory}
    assert d["fwhr"] == pytest.approx(metrics.fwhr)
    assert isinstance(d["ipd"], float)


def test_gonial_angle_through_extraction(jaw_landmarks):
    kp = extract_key_points(jaw_landmarks)
    assert kp.left_gonion == Point2D(45, 175)
    assert kp.left_cheekbone == Point2D(40, 110)
    m = compute_face_metrics(kp)
    # Rays from the gonion to the cheekbone (-5, -65) and to the chin (55, 25)
    cos_angle = (-5 * 55 + -65 * 25) / (math.hypot(5, 65) * math.hypot(55, 25))
    assert m.gonial_angle == pytest.approx(math.degrees(math.acos(cos_angle)))
    assert 115.0 < m.gonial_angle < 130.0
