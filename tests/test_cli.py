import json
from pathlib import Path

import pytest

from storysheet.core.scheduler import ManualScheduler
from storysheet.presentation.cli import app, config
from storysheet.presentation.cli.app import _main_menu_options
from storysheet.presentation.cli.render import debug_enabled, format_choice, wrap_paragraphs
from storysheet.presentation.cli.save_store import FileSaveStore
from storysheet.services.errors import SaveLoadError
from storysheet.services.save_service import MemorySaveStore
from storysheet.services.story_service import ChoiceView, StoryService
from tests.helpers.sheets import make_game, story_row


def _make_service(store: object | None = None) -> StoryService:
    game = make_game(story_row("A", "Hi", choices=[("Rest", "B")]), story_row("B", "Camp", transition="checkpoint"))
    return StoryService(
        game,
        scheduler=ManualScheduler(),
        save_store=store or MemorySaveStore(),  # type: ignore[arg-type]
        observer=lambda event: None,
    )


def test_main_menu_hides_continue_without_save() -> None:
    labels = [label for label, _ in _main_menu_options(_make_service())]

    assert labels == ["New Game", "Import Save", "Quit"]


def test_main_menu_shows_continue_after_autosave() -> None:
    service = _make_service()
    service.choose(0)

    labels = [label for label, _ in _main_menu_options(service)]

    assert labels[:3] == ["New Game", "Continue", "Export Save"]


def test_format_choice_marks_styles() -> None:
    assert format_choice(1, ChoiceView("Attack", "x", "danger")) == "1. Attack (!)"
    assert format_choice(2, ChoiceView("Sneak", "y", "subtle")) == "2. Sneak (~)"
    assert format_choice(3, ChoiceView("Wait", "z")) == "3. Wait"


def test_wrap_paragraphs_keeps_blank_lines() -> None:
    lines = wrap_paragraphs("short\n\n" + "word " * 30, width=20)

    assert lines[0] == "short"
    assert lines[1] == ""
    assert all(len(line) <= 20 for line in lines)


def test_debug_flag_requires_exact_value(monkeypatch) -> None:
    monkeypatch.setenv("STORYSHEET_DEBUG", "1")
    assert debug_enabled()
    monkeypatch.setenv("STORYSHEET_DEBUG", "true")
    assert not debug_enabled()
    monkeypatch.delenv("STORYSHEET_DEBUG", raising=False)
    assert not debug_enabled()


def test_config_defaults_and_normalization(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    assert config.load_config(path) == config.DEFAULT_CONFIG

    path.write_text(
        json.dumps({"fade_duration_ms": 50_000, "fade_hold_ms": True, "continue_label": 3, "asset_base_url": "x/"}),
        encoding="utf-8",
    )
    loaded = config.load_config(path)

    assert loaded["fade_duration_ms"] == 10_000
    assert loaded["fade_hold_ms"] == 150
    assert loaded["continue_label"] == "Continue"
    assert loaded["asset_base_url"] == "x/"


def test_invalid_config_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert config.load_config(path) == config.DEFAULT_CONFIG


def test_file_save_store_round_trip(tmp_path: Path) -> None:
    store = FileSaveStore(tmp_path / "saves")
    service = _make_service(store)

    assert not store.has_save("test-sheet")
    service.choose(0)
    assert store.has_save("test-sheet")
    payload = store.read("test-sheet")
    assert payload is not None
    assert payload["current_node_id"] == "B"

    store.delete("test-sheet")
    assert store.read("test-sheet") is None
    store.delete("test-sheet")


def test_file_save_store_keys_by_sheet(tmp_path: Path) -> None:
    store = FileSaveStore(tmp_path)
    store.write("one", {"value": 1})
    store.write("two", {"value": 2})

    assert store.read("one") == {"value": 1}
    assert store.read("two") == {"value": 2}


def test_export_and_import_files(tmp_path: Path) -> None:
    destination = tmp_path / "export.json"
    FileSaveStore.write_export({"save_version": 1}, destination)

    assert FileSaveStore.read_export(destination) == {"save_version": 1}

    broken = tmp_path / "broken.json"
    broken.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SaveLoadError):
        FileSaveStore.read_export(broken)
    with pytest.raises(SaveLoadError):
        FileSaveStore.read_export(tmp_path / "missing.json")


def test_main_reports_unloadable_sheet(tmp_path: Path, capsys) -> None:
    code = app.main([str(tmp_path / "missing"), "--config", str(tmp_path / "config.json")])

    assert code == 1
    assert "Failed to load game" in capsys.readouterr().out


def test_main_plays_sample_to_an_ending(tmp_path: Path, monkeypatch, capsys) -> None:
    answers = iter(["1", "1", "1", "2", "2", "6"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    code = app.main(["--config", str(tmp_path / "config.json"), "--save-dir", str(tmp_path / "saves")])

    output = capsys.readouterr().out
    assert code == 0
    assert "=== The Forked Trail ===" in output
    assert "Your journey ends here." in output
    assert "=== The End ===" in output
    assert "Goodbye!" in output


def test_export_to_bad_path_reports_failure(tmp_path: Path, monkeypatch, capsys) -> None:
    service = _make_service()
    service.choose(0)
    destination = tmp_path / "no-such-dir" / "export.json"
    monkeypatch.setattr("builtins.input", lambda prompt="": str(destination))

    app._export_save(service)

    assert "Export failed" in capsys.readouterr().out
    assert not destination.exists()
