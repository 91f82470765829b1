from pathlib import Path

from storysheet.data import paths


def test_get_sheets_path_base_path(tmp_path: Path) -> None:
    assert paths.get_sheets_path(tmp_path) == tmp_path
    assert paths.get_sheets_path(str(tmp_path)) == tmp_path


def test_get_sheets_path_source_repo_exists() -> None:
    sheets_path = paths.get_sheets_path()
    assert sheets_path.name == "sheets"
    assert (sheets_path / paths.STORY_FILENAME).exists()
    assert (sheets_path / paths.METADATA_FILENAME).exists()
