"""Console-driven player for sheet-defined stories."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from storysheet.core.scheduler import ManualScheduler
from storysheet.data.errors import DataError
from storysheet.domain.assets import prepare_text
from storysheet.presentation.cli import config
from storysheet.presentation.cli.render import (
    debug_enabled,
    render_heading,
    render_menu,
    render_node,
    render_text_page,
)
from storysheet.presentation.cli.save_store import FileSaveStore
from storysheet.services.errors import SaveLoadError
from storysheet.services.sheet_service import load_game_from_dir
from storysheet.services.story_service import StoryService
from storysheet.services.transition_sequencer import FadePhase

MenuOption = Tuple[str, str]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a story exported from a spreadsheet.")
    parser.add_argument(
        "sheet_dir",
        nargs="?",
        type=Path,
        help="Directory containing story.csv and metadata.csv (defaults to the bundled sample).",
    )
    parser.add_argument("--sheet-id", help="Identifier used to key save data.")
    parser.add_argument("--config", type=Path, help="Path to a config.json file.")
    parser.add_argument("--save-dir", type=Path, help="Directory for save files.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive CLI session."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if debug_enabled() else logging.WARNING)

    settings = config.load_config(args.config)
    try:
        game = load_game_from_dir(args.sheet_dir, sheet_id=args.sheet_id)
    except DataError as exc:
        print(f"Failed to load game: {exc}")
        return 1

    scheduler = ManualScheduler()
    service = StoryService(
        game,
        scheduler=scheduler,
        save_store=FileSaveStore(args.save_dir),
        fade_duration=settings["fade_duration_ms"] / 1000,
        hold_duration=settings["fade_hold_ms"] / 1000,
        asset_base_url=settings["asset_base_url"] or None,
        continue_label=settings["continue_label"],
        blank_branch_label=settings["blank_branch_label"],
    )
    print(f"=== {game.metadata.title} ===")
    if game.metadata.author:
        print(f"by {game.metadata.author}")
    if game.metadata.description:
        print(prepare_text(game.metadata.description))

    while True:
        action = _main_menu_loop(service)
        if action == "quit":
            break
        if action == "new_game":
            service.start_new_game()
        elif action == "continue":
            if not _try_continue(service):
                continue
        elif action == "import":
            if not _import_save(service):
                continue
        elif action == "export":
            _export_save(service)
            continue
        elif action == "credits":
            render_text_page("Credits", game.metadata.credits)
            continue
        elif action == "about":
            render_text_page("About", game.metadata.about)
            continue
        _run_story_loop(service, scheduler)
    print("Goodbye!")
    return 0


def _main_menu_options(service: StoryService) -> List[MenuOption]:
    options: List[MenuOption] = [("New Game", "new_game")]
    if service.has_save():
        options.append(("Continue", "continue"))
        options.append(("Export Save", "export"))
    options.append(("Import Save", "import"))
    if service.game.metadata.credits:
        options.append(("Credits", "credits"))
    if service.game.metadata.about:
        options.append(("About", "about"))
    options.append(("Quit", "quit"))
    return options


def _main_menu_loop(service: StoryService) -> str:
    options = _main_menu_options(service)
    render_menu("Main Menu", [label for label, _ in options])
    index = _prompt_index(len(options))
    assert index is not None
    return options[index][1]


def _run_story_loop(service: StoryService, scheduler: ManualScheduler) -> None:
    while True:
        view = service.get_current_node_view()
        render_node(view)
        if view.is_ending:
            render_heading("The End")
            return
        index = _prompt_index(len(view.choices), allow_quit=True)
        if index is None:
            return
        result = service.choose(index)
        if not result.accepted:
            print("Nothing happens.")
            continue
        if service.fade_phase is not FadePhase.HIDDEN:
            _play_fade(scheduler)


def _play_fade(scheduler: ManualScheduler) -> None:
    print("\n. . .")
    scheduler.run_until_idle()


def _try_continue(service: StoryService) -> bool:
    try:
        return service.continue_game()
    except SaveLoadError as exc:
        print(f"Could not load save: {exc}")
        return False


def _import_save(service: StoryService) -> bool:
    raw_path = input("Path to save file: ").strip()
    if not raw_path:
        return False
    try:
        service.import_save(FileSaveStore.read_export(Path(raw_path)))
    except SaveLoadError as exc:
        print(f"Import failed: {exc}")
        return False
    return True


def _export_save(service: StoryService) -> None:
    payload = service.export_save()
    if payload is None:
        print("No save to export.")
        return
    raw_path = input("Export to file: ").strip()
    if not raw_path:
        return
    try:
        FileSaveStore.write_export(payload, Path(raw_path))
    except OSError as exc:
        print(f"Export failed: {exc}")
        return
    print(f"Save exported to {raw_path}")


def _prompt_index(count: int, *, allow_quit: bool = False) -> int | None:
    prompt = "Select an option" + (" (q to leave): " if allow_quit else ": ")
    while True:
        raw = input(prompt).strip()
        if allow_quit and raw.lower() == "q":
            return None
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < count:
            return index
        print(f"Please enter a value between 1 and {count}.")
