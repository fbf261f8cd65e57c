"""
Tests for narration text and the playback state machine.
"""
import asyncio

import pytest

from fitplan.models.plan import FitnessPlan
from fitplan.services.narration import (
    NarrationPlayer,
    PlaybackState,
    PlaybackStateError,
    diet_text,
    section_text,
    tips_text,
    workout_text,
)


@pytest.fixture
def plan(sample_plan):
    return FitnessPlan.model_validate(sample_plan)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestNarrationText:

    def test_workout_text(self, plan):
        text = workout_text(plan)

        assert text.startswith("Your 7-day workout plan. Day 1. Focus: Full Body.")
        assert "Exercise 1: Bodyweight Squats. 3 sets of 12-15 reps. Rest 60 seconds." in text
        assert "Cool-down: Deep breathing." in text

    def test_workout_text_skips_absent_details(self, sample_plan):
        exercise = sample_plan["workoutPlan"]["days"][0]["exercises"][0]
        del exercise["sets"]
        del exercise["rest"]
        del sample_plan["workoutPlan"]["days"][0]["warmup"]

        text = workout_text(FitnessPlan.model_validate(sample_plan))

        assert "Exercise 1: Bodyweight Squats. 12-15 reps. Exercise 2:" in text
        assert "Warm-up" not in text.split("Day 2")[0]
        assert "None" not in text.split("Day 2")[0]

    def test_diet_text_skips_absent_snacks(self, plan):
        text = diet_text(plan)

        assert "Vegetable Poha at 8:00 AM. Items: Poha with peas, Green tea." in text
        assert "Mid-Morning" not in text
        assert text.index("Dal and Rice") < text.index("Roasted Chana") < text.index("Paneer Stir Fry")

    def test_tips_text(self, plan):
        text = tips_text(plan)

        assert "Tip 2: Sleep 7-8 hours." in text
        assert text.endswith("Motivation: Small steps every day add up to big changes.")

    def test_section_text_dispatch(self, plan):
        assert section_text(plan, "diet") == diet_text(plan)
        with pytest.raises(ValueError):
            section_text(plan, "music")


class TestNarrationPlayer:

    def test_full_cycle(self):
        clock = FakeClock()
        player = NarrationPlayer(clock=clock)
        assert player.state == PlaybackState.IDLE

        player.load()
        assert player.state == PlaybackState.LOADING

        player.loaded(b"audio", duration=30.0)
        assert player.state == PlaybackState.PLAYING

        clock.now += 4
        player.pause()
        assert player.state == PlaybackState.PAUSED
        assert player.position == 4

        clock.now += 10
        assert player.position == 4

        player.resume()
        clock.now += 2
        assert player.position == 6

        player.finish()
        assert player.state == PlaybackState.IDLE
        assert player.audio is None

    def test_stop_is_noop_when_idle(self):
        player = NarrationPlayer()
        player.stop()
        player.stop()
        assert player.state == PlaybackState.IDLE

    def test_stop_from_paused(self):
        player = NarrationPlayer(clock=FakeClock())
        player.load()
        player.loaded(b"audio")
        player.pause()
        player.stop()

        assert player.state == PlaybackState.IDLE
        assert player.position == 0

    def test_undefined_transitions_raise(self):
        player = NarrationPlayer()
        with pytest.raises(PlaybackStateError):
            player.pause()
        with pytest.raises(PlaybackStateError):
            player.resume()
        with pytest.raises(PlaybackStateError):
            player.loaded(b"audio")

    def test_load_while_playing_restarts(self):
        player = NarrationPlayer(clock=FakeClock())
        player.load()
        player.loaded(b"first")
        player.load()

        assert player.state == PlaybackState.LOADING
        assert player.audio is None

    def test_play_success(self):
        async def synthesize(text):
            return text.encode()

        player = NarrationPlayer()
        audio = asyncio.run(player.play("hello", synthesize))

        assert audio == b"hello"
        assert player.state == PlaybackState.PLAYING

    def test_play_failure_returns_to_idle(self):
        async def synthesize(text):
            raise RuntimeError("tts down")

        player = NarrationPlayer()
        with pytest.raises(RuntimeError):
            asyncio.run(player.play("hello", synthesize))

        assert player.state == PlaybackState.IDLE
