"""Domain definition exports."""

from .metadata_def import Metadata
from .story_def import Choice, StoryNode, Transition

__all__ = [
    "Choice",
    "Metadata",
    "StoryNode",
    "Transition",
]
