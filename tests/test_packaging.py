from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_project_metadata_has_no_readme_pointer_to_notes():
    text = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
    assert "readme" not in text
    assert 'name = "psl-scorer"' in text
