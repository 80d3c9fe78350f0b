import json

import pytest

from psl_scorer import FaceAnalyzer, MissingLandmarksError, rank_scans
from psl_scorer.catalog import load_catalog
from psl_scorer.recommendations import ALWAYS_ROUTINES


def test_analyze_pipeline(landmarks, body):
    report = FaceAnalyzer().analyze(landmarks, body)
    result = report.result
    assert 1.0 <= result.overall <= 10.0
    assert result.overall <= result.potential_max
    assert report.metrics.ipd == pytest.approx(report.key_points.ipd)
    titles = [r.title for r in report.recommendations]
    assert set(ALWAYS_ROUTINES) <= set(titles)
    ranks = [r.priority.rank for r in report.recommendations]
    assert ranks == sorted(ranks)
    # Skin stub is 7, below the skincare threshold
    assert "Core Skincare Protocol" in titles
    assert 1.0 <= report.midface_score <= 10.0


def test_skin_texture_override(landmarks, body):
    report = FaceAnalyzer(catalog=load_catalog(), skin_texture_score=9.5).analyze(landmarks, body)
    assert report.result.softmax.skin_texture == 9.5
    assert "Core Skincare Protocol" not in [r.title for r in report.recommendations]


def test_missing_landmarks_propagate(landmarks, body):
    del landmarks["rightEye"]
    with pytest.raises(MissingLandmarksError):
        FaceAnalyzer().analyze(landmarks, body)


def test_analyze_file_and_report_dict(landmark_file, body):
    report = FaceAnalyzer().analyze_file(str(landmark_file), body)
    d = report.to_dict()
    assert set(d) == {"metrics", "scores", "midface_score", "recommendations"}
    json.dumps(d)


def test_rank_scans_orders_and_skips(tmp_path, landmarks, body):
    good = tmp_path / "a_good.json"
    good.write_text(json.dumps(landmarks), encoding="utf-8")

    skewed = dict(landmarks)
    skewed["faceContour"] = [list(p) for p in landmarks["faceContour"]]
    skewed["faceContour"][8] = [160, 130]
    worse = tmp_path / "b_worse.json"
    worse.write_text(json.dumps(skewed), encoding="utf-8")

    broken = dict(landmarks)
    del broken["nose"]
    bad = tmp_path / "c_bad.json"
    bad.write_text(json.dumps(broken), encoding="utf-8")

    calls = []
    ranked = rank_scans(
        [str(worse), str(bad), str(good), str(tmp_path / "missing.json")],
        body,
        progress_callback=lambda done, total: calls.append((done, total)),
    )
    assert [p for p, _ in ranked] == [str(good), str(worse)]
    assert ranked[0][1].result.overall >= ranked[1][1].result.overall
    assert calls[-1] == (4, 4)

    assert len(rank_scans([str(good), str(worse)], body, top_k=1)) == 1


def test_rank_scans_skips_malformed_points(tmp_path, landmarks, body):
    good = tmp_path / "good.json"
    good.write_text(json.dumps(landmarks), encoding="utf-8")
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps(dict(landmarks, nose=[5, 6])), encoding="utf-8")
    missing_y = tmp_path / "missing_y.json"
    missing_y.write_text(json.dumps(dict(landmarks, nose=[{"x": 100}])), encoding="utf-8")

    ranked = rank_scans([str(bad), str(missing_y), str(good)], body)
    assert [p for p, _ in ranked] == [str(good)]


def test_analyze_scores_jaw_inside_ideal_band(jaw_landmarks, body):
    report = FaceAnalyzer().analyze(jaw_landmarks, body)
    angle = report.metrics.gonial_angle
    assert 115.0 < angle < 130.0
    assert report.result.bone_structure.gonial_angle == pytest.approx(8.0 + (130.0 - angle) / 15.0 * 2.0)
    assert report.result.bone_structure.gonial_angle > 8.0
