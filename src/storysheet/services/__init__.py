"""Service layer exports."""

from .errors import SaveLoadError
from .save_service import MemorySaveStore, SaveService, SaveStore
from .sheet_service import LoadedGame, build_game, load_game_from_dir
from .story_service import ChoiceResult, ChoiceView, StoryNodeView, StoryService
from .transition_sequencer import FadePhase, TransitionSequencer

__all__ = [
    "ChoiceResult",
    "ChoiceView",
    "FadePhase",
    "LoadedGame",
    "MemorySaveStore",
    "SaveLoadError",
    "SaveService",
    "SaveStore",
    "StoryNodeView",
    "StoryService",
    "TransitionSequencer",
    "build_game",
    "load_game_from_dir",
]
