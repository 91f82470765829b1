"""Turns exported sheet tabs into a playable game."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Sequence

from storysheet.core.events import (
    DuplicateNodeEvent,
    GameLoadedEvent,
    Observer,
    StartNodeDefaultedEvent,
    log_event,
)
from storysheet.data.csv_parser import parse_rows
from storysheet.data.errors import SchemaError
from storysheet.data.metadata_schema import map_metadata_rows
from storysheet.data.repositories import MetadataRepository, StoryRepository
from storysheet.data.story_schema import map_story_rows
from storysheet.domain.defs import Metadata, StoryNode
from storysheet.domain.graph import StoryGraph


@dataclass(frozen=True, slots=True)
class LoadedGame:
    """A validated graph plus metadata whose ``start_node`` resolves."""

    sheet_id: str
    graph: StoryGraph
    metadata: Metadata

    @property
    def start_node_id(self) -> str:
        assert self.metadata.start_node is not None
        return self.metadata.start_node


def build_game(
    story_text: str,
    metadata_text: str,
    *,
    sheet_id: str,
    observer: Observer | None = None,
) -> LoadedGame:
    """Parse both tabs from text; raises SchemaError without exposing partial data."""
    nodes = map_story_rows(parse_rows(story_text))
    metadata = map_metadata_rows(parse_rows(metadata_text))
    return assemble_game(nodes, metadata, sheet_id=sheet_id, observer=observer)


def load_game_from_dir(
    base_path: Path | str | None = None,
    *,
    sheet_id: str | None = None,
    observer: Observer | None = None,
) -> LoadedGame:
    """Load ``story.csv`` and ``metadata.csv`` from a directory."""
    story_repo = StoryRepository(base_path)
    metadata_repo = MetadataRepository(base_path)
    nodes = story_repo.all()
    metadata = metadata_repo.load()
    resolved_id = sheet_id or str(story_repo.file_path.parent.resolve())
    return assemble_game(nodes, metadata, sheet_id=resolved_id, observer=observer)


def assemble_game(
    nodes: Sequence[StoryNode],
    metadata: Metadata,
    *,
    sheet_id: str,
    observer: Observer | None = None,
) -> LoadedGame:
    notify = observer or log_event
    graph = StoryGraph(nodes)
    if graph.first_node_id is None:
        raise SchemaError("Story sheet does not contain any playable nodes.")
    for node_id in graph.duplicate_ids:
        notify(DuplicateNodeEvent(node_id=node_id))

    if not metadata.start_node:
        metadata = replace(metadata, start_node=graph.first_node_id)
        notify(StartNodeDefaultedEvent(node_id=graph.first_node_id))
    elif metadata.start_node not in graph:
        raise SchemaError(f'Start node "{metadata.start_node}" does not exist in the story sheet.')

    game = LoadedGame(sheet_id=sheet_id, graph=graph, metadata=metadata)
    notify(
        GameLoadedEvent(
            sheet_id=sheet_id,
            node_count=len(graph),
            start_node=game.start_node_id,
            title=metadata.title,
        )
    )
    return game
