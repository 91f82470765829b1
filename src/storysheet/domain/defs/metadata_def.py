"""Game-level metadata read from the metadata tab."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Metadata:
    """Title screen and credits information.

    ``start_node`` may be ``None`` straight out of the sheet; the game loader
    resolves it against the story graph.
    """

    title: str
    author: str | None = None
    description: str | None = None
    start_node: str | None = None
    credits: str | None = None
    about: str | None = None
    theme: str | None = None
    version: str | None = None
