"""Read-only lookup table from node id to StoryNode."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from storysheet.domain.defs import StoryNode


class StoryGraph(Mapping[str, StoryNode]):
    """Immutable node table built once per sheet load.

    Iteration follows sheet order. When an id repeats, the later row replaces
    the earlier one and the id is recorded in ``duplicate_ids``.
    """

    __slots__ = ("_nodes", "_first_node_id", "_duplicate_ids")

    def __init__(self, nodes: Iterable[StoryNode]) -> None:
        table: Dict[str, StoryNode] = {}
        duplicates: List[str] = []
        first_node_id: str | None = None
        for node in nodes:
            if first_node_id is None:
                first_node_id = node.node_id
            if node.node_id in table and node.node_id not in duplicates:
                duplicates.append(node.node_id)
            table[node.node_id] = node
        self._nodes: Mapping[str, StoryNode] = MappingProxyType(table)
        self._first_node_id = first_node_id
        self._duplicate_ids: Tuple[str, ...] = tuple(duplicates)

    def __getitem__(self, node_id: str) -> StoryNode:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"StoryGraph({len(self._nodes)} nodes)"

    @property
    def first_node_id(self) -> str | None:
        return self._first_node_id

    @property
    def duplicate_ids(self) -> Tuple[str, ...]:
        return self._duplicate_ids
