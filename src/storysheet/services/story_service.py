"""Story progression services."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from storysheet.core.events import (
    AutosaveFailedEvent,
    AutosavedEvent,
    EngineEvent,
    InputLockedEvent,
    NavigationBlockedEvent,
    NodeEnteredEvent,
    Observer,
    log_event,
)
from storysheet.core.scheduler import Scheduler
from storysheet.core.types import ChoiceStyle, SpeakerPosition
from storysheet.domain.assets import prepare_text, resolve_asset_url
from storysheet.domain.choice_filter import filter_choices
from storysheet.domain.defs import Choice, StoryNode, Transition
from storysheet.domain.navigation import NavigationStateMachine
from storysheet.domain.scene import SceneState, advance_scene
from storysheet.domain.state import GameState
from storysheet.services.errors import SaveLoadError
from storysheet.services.save_service import MemorySaveStore, SavePayload, SaveService, SaveStore
from storysheet.services.sheet_service import LoadedGame
from storysheet.services.transition_sequencer import (
    DEFAULT_FADE_DURATION,
    DEFAULT_HOLD_DURATION,
    FadePhase,
    TransitionSequencer,
)


@dataclass(slots=True)
class ChoiceView:
    """A choice as the player sees it."""

    label: str
    target: str
    style: ChoiceStyle | None = None


@dataclass(slots=True)
class StoryNodeView:
    """Data returned to the presentation layer for rendering."""

    node_id: str
    speaker: str | None
    speaker_position: SpeakerPosition | None
    text: str
    choices: List[ChoiceView]
    is_auto_advance: bool
    is_ending: bool
    background: str | None
    left_image: str | None
    center_image: str | None
    right_image: str | None
    music: str | None
    sound_effect: str | None
    scene_generation: int
    fade_phase: FadePhase


@dataclass(slots=True)
class ChoiceResult:
    """Result returned after selecting a choice."""

    accepted: bool
    events: List[EngineEvent] = field(default_factory=list)
    node_view: StoryNodeView | None = None


class StoryService:
    """Application service that plays one loaded game."""

    def __init__(
        self,
        game: LoadedGame,
        *,
        scheduler: Scheduler,
        save_store: SaveStore | None = None,
        fade_duration: float = DEFAULT_FADE_DURATION,
        hold_duration: float = DEFAULT_HOLD_DURATION,
        asset_base_url: str | None = None,
        continue_label: str = "Continue",
        blank_branch_label: str = "",
        observer: Observer | None = None,
    ) -> None:
        self._observer = observer or log_event
        self._collected: List[EngineEvent] | None = None
        self._save_store = save_store if save_store is not None else MemorySaveStore()
        self._asset_base_url = asset_base_url
        self._continue_label = continue_label
        self._blank_branch_label = blank_branch_label
        self._sequencer = TransitionSequencer(
            scheduler,
            self._commit_fade,
            fade_duration=fade_duration,
            hold_duration=hold_duration,
            observer=self._emit,
        )
        self._install(game)

    @property
    def game(self) -> LoadedGame:
        return self._game

    @property
    def state(self) -> GameState:
        return self._navigation.snapshot()

    @property
    def scene(self) -> SceneState:
        return self._scene

    @property
    def fade_phase(self) -> FadePhase:
        return self._sequencer.phase

    def load_game(self, game: LoadedGame) -> GameState:
        """Replace the whole graph, abandoning any fade in progress."""
        self._sequencer.cancel()
        self._install(game)
        return self.state

    def start_new_game(self) -> GameState:
        """Reset to the start node with no flags or history."""
        self._sequencer.cancel()
        state = self._navigation.reset(self._game.start_node_id)
        self._scene = advance_scene(SceneState(), self._current_node())
        self._emit(NodeEnteredEvent(node_id=state.current_node_id, via="reset"))
        return state

    def restart(self) -> GameState:
        return self.start_new_game()

    def has_save(self) -> bool:
        return self._save_store.has_save(self._game.sheet_id)

    def continue_game(self) -> bool:
        """Restore the stored save for this sheet; False when there is none."""
        payload = self._save_store.read(self._game.sheet_id)
        if payload is None:
            return False
        self._restore(self._save_service.deserialize(payload, sheet_id=self._game.sheet_id))
        return True

    def import_save(self, payload: Mapping[str, Any]) -> GameState:
        """Validate an exported save, store it and resume from it."""
        state = self._save_service.deserialize(payload, sheet_id=self._game.sheet_id)
        self._save_store.write(self._game.sheet_id, dict(payload))
        self._restore(state)
        return state

    def export_save(self) -> SavePayload | None:
        return self._save_store.read(self._game.sheet_id)

    def save(self) -> SavePayload:
        """Persist the current state for this sheet."""
        state = self.state
        payload = self._save_service.serialize(state, self._game.sheet_id)
        self._save_store.write(self._game.sheet_id, payload)
        self._emit(AutosavedEvent(sheet_id=self._game.sheet_id, node_id=state.current_node_id))
        return payload

    def visible_choices(self) -> List[Choice]:
        """Choices of the current node whose destinations are reachable."""
        node = self._current_node()
        return filter_choices(node.choices, self.state.flags, self._game.graph, observer=self._emit)

    def get_current_node_view(self) -> StoryNodeView:
        """Return the view model for the currently active node."""
        node = self._current_node()
        choices = self.visible_choices()
        auto_advance = len(choices) == 1 and not choices[0].text
        scene = self._scene
        return StoryNodeView(
            node_id=node.node_id,
            speaker=node.speaker,
            speaker_position=node.speaker_position,
            text=prepare_text(node.text),
            choices=[self._choice_view(choice, auto_advance) for choice in choices],
            is_auto_advance=auto_advance,
            is_ending=not choices,
            background=self._resolve(scene.background),
            left_image=self._resolve(scene.left),
            center_image=self._resolve(scene.center),
            right_image=self._resolve(scene.right),
            music=self._resolve(scene.music),
            sound_effect=self._resolve(node.sound_effect),
            scene_generation=scene.generation,
            fade_phase=self._sequencer.phase,
        )

    def choose(self, choice_index: int) -> ChoiceResult:
        """Apply the selected visible choice.

        Choices made during a fade and choices whose target is missing from the
        graph are ignored and reported through events.
        """
        events: List[EngineEvent] = []
        self._collected = events
        try:
            accepted = self._choose(choice_index)
        finally:
            self._collected = None
        return ChoiceResult(accepted=accepted, events=events, node_view=self.get_current_node_view())

    def _choose(self, choice_index: int) -> bool:
        if not self._sequencer.is_idle:
            self._emit(InputLockedEvent(phase=self._sequencer.phase.value))
            return False
        node = self._current_node()
        choices = self.visible_choices()
        if not choices:
            raise ValueError(f"Story node '{node.node_id}' has no choices to select.")
        if not 0 <= choice_index < len(choices):
            raise IndexError(f"Choice index {choice_index} is invalid for node '{node.node_id}'.")
        selected = choices[choice_index]

        target_node = self._game.graph.get(selected.target)
        if target_node is None:
            self._emit(NavigationBlockedEvent(source_node_id=node.node_id, target=selected.target))
            return False

        if target_node.transition is Transition.FADE:
            self._sequencer.start(selected.target, target_node)
        elif target_node.transition is Transition.CHECKPOINT:
            self._enter(selected.target, target_node, via="checkpoint")
            self._autosave()
        else:
            self._enter(selected.target, target_node, via="cut")
        return True

    def _commit_fade(self, target_id: str, target_node: StoryNode) -> None:
        self._enter(target_id, target_node, via="fade")
        self._autosave()

    def _autosave(self) -> None:
        try:
            self.save()
        except (OSError, SaveLoadError) as exc:
            self._emit(
                AutosaveFailedEvent(
                    sheet_id=self._game.sheet_id,
                    node_id=self.state.current_node_id,
                    reason=str(exc),
                )
            )

    def _enter(self, target_id: str, target_node: StoryNode, *, via: str) -> None:
        self._navigation.navigate(target_id, target_node)
        self._scene = advance_scene(self._scene, target_node)
        self._emit(NodeEnteredEvent(node_id=target_id, via=via))

    def _restore(self, state: GameState) -> None:
        self._sequencer.cancel()
        self._navigation.restore(state)
        self._scene = self._rebuild_scene(state)
        self._emit(NodeEnteredEvent(node_id=state.current_node_id, via="restore"))

    def _rebuild_scene(self, state: GameState) -> SceneState:
        scene = SceneState()
        for node_id in (*state.history, state.current_node_id):
            node = self._game.graph.get(node_id)
            if node is not None:
                scene = advance_scene(scene, node)
        return scene

    def _install(self, game: LoadedGame) -> None:
        self._game = game
        self._save_service = SaveService(game.graph)
        self._navigation = NavigationStateMachine(game.start_node_id)
        self._scene = advance_scene(SceneState(), self._current_node())

    def _current_node(self) -> StoryNode:
        return self._game.graph[self.state.current_node_id]

    def _choice_view(self, choice: Choice, auto_advance: bool) -> ChoiceView:
        if auto_advance:
            label = self._continue_label
        else:
            label = choice.text or self._blank_branch_label
        return ChoiceView(label=label, target=choice.target, style=choice.style)

    def _resolve(self, value: str | None) -> str | None:
        return resolve_asset_url(value, self._asset_base_url)

    def _emit(self, event: EngineEvent) -> None:
        if self._collected is not None:
            self._collected.append(event)
        self._observer(event)
