"""Repository exports."""

from .metadata_repo import MetadataRepository
from .story_repo import StoryRepository

__all__ = [
    "MetadataRepository",
    "StoryRepository",
]
