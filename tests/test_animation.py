"""Tests for animation – demo frame sequences and playback."""

import random

import pytest

from sevenseg.animation import (
    COUNT_DELAY_MS,
    KIND_DIGIT,
    KIND_SEGMENTS,
    RANDOM_DELAY_MS,
    Frame,
    apply_frame,
    count,
    demo_sequence,
    play,
    random_digits,
    random_segments,
)
from sevenseg.controller import SevenSegController, mask_for_segments
from sevenseg.core.models import DEFAULT_SHAPE_PARAMS, DIGITS
from sevenseg.geometry import generate


def _controller():
    digit = generate(DEFAULT_SHAPE_PARAMS)
    return SevenSegController(digit.parts), digit.parts


def _lit(parts):
    return mask_for_segments({n: p.has_class('seven-seg--on') for n, p in parts.items()})


class TestCount:
    def test_count_down(self):
        assert [f.value for f in count(9, 0)] == list(range(9, -1, -1))

    def test_count_up(self):
        assert [f.value for f in count(0, 9)] == list(range(10))

    def test_single_step(self):
        assert [f.value for f in count(4, 4)] == [4]

    def test_clamps_both_ends(self):
        assert [f.value for f in count(-5, 20)] == list(range(10))
        assert [f.value for f in count(42, 7)] == [9, 8, 7]

    def test_frames_are_digits_with_delay(self):
        frames = count(0, 2)
        assert all(f.kind == KIND_DIGIT for f in frames)
        assert all(f.delay == COUNT_DELAY_MS for f in frames)


class TestRandom:
    def test_random_segments_length_and_range(self):
        frames = random_segments(4000, rng=random.Random(1))
        assert len(frames) == 4000 // RANDOM_DELAY_MS
        assert all(f.kind == KIND_SEGMENTS and 0 <= f.value <= 255 for f in frames)

    def test_random_digits_range(self):
        frames = random_digits(2000, delay=50, rng=random.Random(2))
        assert len(frames) == 40
        assert all(f.kind == KIND_DIGIT and 0 <= f.value <= 9 for f in frames)

    def test_seeded_is_reproducible(self):
        a = demo_sequence(random.Random(7))
        b = demo_sequence(random.Random(7))
        assert a == b

    def test_short_duration_yields_nothing(self):
        assert random_digits(50, delay=100) == []


class TestDemoSequence:
    def test_cycle_layout(self):
        frames = demo_sequence(random.Random(0))
        assert len(frames) == 10 + 40 + 10 + 20
        assert [f.value for f in frames[:10]] == list(range(9, -1, -1))
        assert all(f.kind == KIND_SEGMENTS for f in frames[10:50])
        assert [f.value for f in frames[50:60]] == list(range(10))
        assert all(f.kind == KIND_DIGIT for f in frames[60:])

    def test_total_duration(self):
        frames = demo_sequence(random.Random(0))
        assert sum(f.delay for f in frames) == 20 * 300 + 4000 + 2000


class TestPlayback:
    def test_apply_digit_frame(self):
        ctrl, parts = _controller()
        apply_frame(ctrl, Frame(KIND_DIGIT, 5, 300))
        assert _lit(parts) == DIGITS[5]

    def test_apply_segments_frame(self):
        ctrl, parts = _controller()
        apply_frame(ctrl, Frame(KIND_SEGMENTS, 0b10000001, 100))
        assert _lit(parts) == 0b10000001

    def test_unknown_kind(self):
        ctrl, _ = _controller()
        with pytest.raises(ValueError):
            apply_frame(ctrl, Frame("blink", 1, 100))

    def test_play_calls_back_after_each_frame(self):
        ctrl, parts = _controller()
        seen = []
        n = play(ctrl, count(3, 1), on_frame=lambda f: seen.append((f.value, _lit(parts))))
        assert n == 3
        assert seen == [(3, DIGITS[3]), (2, DIGITS[2]), (1, DIGITS[1])]

    def test_play_without_callback(self):
        ctrl, parts = _controller()
        assert play(ctrl, count(0, 9)) == 10
        assert _lit(parts) == DIGITS[9]
