import pathlib

from hcm_skills.version import DEFAULT_VERSION, read_version


def test_version_file_exists():
    root = pathlib.Path(__file__).resolve().parents[1]
    version_path = root / "VERSION"
    assert version_path.exists(), "VERSION file must exist"
    assert version_path.read_text(encoding="utf-8").strip() != "", "VERSION must not be empty"


def test_read_version_matches_file():
    root = pathlib.Path(__file__).resolve().parents[1]
    assert read_version() == (root / "VERSION").read_text(encoding="utf-8").strip()


def test_read_version_defaults_when_missing(tmp_path):
    assert read_version(tmp_path / "VERSION") == DEFAULT_VERSION
    (tmp_path / "VERSION").write_text("  \n", encoding="utf-8")
    assert read_version(tmp_path / "VERSION") == DEFAULT_VERSION
