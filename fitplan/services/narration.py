"""
Narration text for plan sections and the playback state machine.
"""
import time
from enum import Enum
from typing import Callable

from fitplan.core.logger import logger
from fitplan.models.plan import FitnessPlan


# --- Text derivation ---

def _sentences(*parts) -> str:
    return "".join(f"{part}. " for part in parts if part)


def _exercise_detail(ex) -> str:
    if ex.sets is not None and ex.reps:
        volume = f"{ex.sets} sets of {ex.reps} reps"
    elif ex.sets is not None:
        volume = f"{ex.sets} sets"
    else:
        volume = f"{ex.reps} reps" if ex.reps else None
    return _sentences(volume, ex.rest and f"Rest {ex.rest}")


def workout_text(plan: FitnessPlan) -> str:
    text = "Your 7-day workout plan. "
    for day in plan.workoutPlan.days:
        text += _sentences(
            day.day,
            day.focus and f"Focus: {day.focus}",
            day.warmup and f"Warm-up: {day.warmup}",
        )
        for i, ex in enumerate(day.exercises, start=1):
            text += f"Exercise {i}: {ex.name}. " + _exercise_detail(ex)
        text += _sentences(day.cooldown and f"Cool-down: {day.cooldown}")
    return text


def diet_text(plan: FitnessPlan) -> str:
    text = "Your daily diet plan. "
    for _, meal in plan.dietPlan.meals():
        heading = f"{meal.name} at {meal.time}" if meal.time else meal.name
        text += _sentences(heading, meal.items and f"Items: {', '.join(meal.items)}")
    return text


def tips_text(plan: FitnessPlan) -> str:
    text = "Fitness tips. "
    for i, tip in enumerate(plan.tips, start=1):
        text += f"Tip {i}: {tip}. "
    text += f"Motivation: {plan.motivation}"
    return text


_SECTION_TEXT = {
    "workout": workout_text,
    "diet": diet_text,
    "tips": tips_text,
}


def section_text(plan: FitnessPlan, section: str) -> str:
    """Narration text for one of: workout, diet, tips."""
    try:
        return _SECTION_TEXT[section](plan)
    except KeyError:
        raise ValueError(f"Unknown narration section: {section}") from None


# --- Playback ---

class PlaybackState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"


class PlaybackStateError(Exception):
    """Raised for a transition the player does not define."""


_TRANSITIONS = {
    "load": {PlaybackState.IDLE, PlaybackState.PLAYING, PlaybackState.PAUSED},
    "loaded": {PlaybackState.LOADING},
    "fail": {PlaybackState.LOADING},
    "pause": {PlaybackState.PLAYING},
    "resume": {PlaybackState.PAUSED},
    "finish": {PlaybackState.PLAYING},
}


class NarrationPlayer:
    """
    Playback controller for one narration clip.

        idle --load--> loading --loaded--> playing --pause--> paused
        loading --fail--> idle        paused --resume--> playing
        playing --finish--> idle      any --stop--> idle

    ``stop`` from idle does nothing. Any other transition not listed raises
    PlaybackStateError. Position is tracked against an injectable clock so
    resume continues where pause left off.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.state = PlaybackState.IDLE
        self.audio: bytes | None = None
        self.duration: float = 0.0
        self._offset: float = 0.0
        self._started_at: float = 0.0

    def _require(self, event: str) -> None:
        if self.state not in _TRANSITIONS[event]:
            raise PlaybackStateError(f"Cannot {event} while {self.state.value}")

    @property
    def position(self) -> float:
        """Seconds into the clip."""
        if self.state == PlaybackState.PLAYING:
            return self._offset + (self._clock() - self._started_at)
        return self._offset

    def load(self) -> None:
        self._require("load")
        if self.state != PlaybackState.IDLE:
            self.stop()
        self.state = PlaybackState.LOADING
        logger.info("Narration loading")

    def loaded(self, audio: bytes, duration: float = 0.0) -> None:
        self._require("loaded")
        self.audio = audio
        self.duration = duration
        self._offset = 0.0
        self._started_at = self._clock()
        self.state = PlaybackState.PLAYING

    def fail(self) -> None:
        self._require("fail")
        self.state = PlaybackState.IDLE

    def pause(self) -> None:
        self._require("pause")
        self._offset = self.position
        self.state = PlaybackState.PAUSED

    def resume(self) -> None:
        self._require("resume")
        self._started_at = self._clock()
        self.state = PlaybackState.PLAYING

    def finish(self) -> None:
        self._require("finish")
        self._reset()

    def stop(self) -> None:
        if self.state == PlaybackState.IDLE:
            return
        logger.info("Narration stopped")
        self._reset()

    def _reset(self) -> None:
        self.state = PlaybackState.IDLE
        self.audio = None
        self.duration = 0.0
        self._offset = 0.0
        self._started_at = 0.0

    async def play(self, text: str, synthesize) -> bytes:
        """
        Load and start narration of ``text``.

        ``synthesize`` is an async callable returning audio bytes. A failed
        synthesis returns the player to idle and re-raises.
        """
        self.load()
        try:
            audio = await synthesize(text)
        except Exception:
            self.fail()
            raise
        self.loaded(audio)
        return audio
