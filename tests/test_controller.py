"""Tests for SevenSegController – digit/mask projection onto a part set.

Tests cover:
- DIGITS table exactness and dp bit
- set_segments bit order (a = 0x80 ... dp = 0x01), masking of wide values
- set_digit wrapping for negative and >9 values
- on()/off() equivalence with 0xFF/0x00
- exactly-one-marker invariant, idempotence
- missing dp handle, string keys, custom markers
"""

import pytest

from sevenseg.controller import (
    DEFAULT_OFF_CLASS,
    DEFAULT_ON_CLASS,
    SevenSegController,
    mask_for_digit,
    mask_for_segments,
    segments_for_mask,
)
from sevenseg.core.models import (
    ALL_OFF,
    ALL_ON,
    DEFAULT_SHAPE_PARAMS,
    DIGITS,
    SEGMENT_ORDER,
    SegmentName,
)
from sevenseg.geometry import generate


def _make(include_dp=True, **kw):
    digit = generate(DEFAULT_SHAPE_PARAMS, include_dp=include_dp)
    return SevenSegController(digit.parts, **kw), digit.parts


def _snapshot(parts):
    return {name: frozenset(part.classes) for name, part in parts.items()}


def _lit_mask(parts, on_class=DEFAULT_ON_CLASS):
    return mask_for_segments({name: part.has_class(on_class)
                              for name, part in parts.items()})


# =========================================================================
# Encoding tables
# =========================================================================

class TestEncoding:
    def test_ten_digits(self):
        assert len(DIGITS) == 10

    def test_digit_table_exact(self):
        assert DIGITS[0] == 0b11111100
        assert DIGITS[1] == 0b01100000
        assert DIGITS[8] == 0b11111110

    def test_dp_bit_never_set_in_digits(self):
        for mask in DIGITS:
            assert mask & 0x01 == 0

    def test_bit_order(self):
        assert [name.bit for name in SEGMENT_ORDER] == [
            0x80, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02, 0x01]
        assert SEGMENT_ORDER[0] is SegmentName.A
        assert SEGMENT_ORDER[-1] is SegmentName.DP

    def test_segments_for_mask_only_a(self):
        flags = segments_for_mask(0b10000000)
        assert flags[SegmentName.A] is True
        assert sum(flags.values()) == 1

    def test_segments_for_mask_ignores_high_bits(self):
        assert segments_for_mask(0x1FF) == segments_for_mask(0xFF)
        assert segments_for_mask(256) == segments_for_mask(0)

    def test_segments_for_negative_mask(self):
        # -1 & 0xFF == 0xFF
        assert all(segments_for_mask(-1).values())

    def test_mask_round_trip_for_digits(self):
        for mask in DIGITS:
            assert mask_for_segments(segments_for_mask(mask)) == mask

    def test_mask_for_segments_accepts_strings(self):
        assert mask_for_segments({'b': True, 'c': True, 'dp': False}) == DIGITS[1]

    def test_mask_for_digit_wraps(self):
        assert mask_for_digit(10) == DIGITS[0]
        assert mask_for_digit(-1) == DIGITS[9]
        assert mask_for_digit(123) == DIGITS[3]


# =========================================================================
# set_segments
# =========================================================================

class TestSetSegments:
    @pytest.mark.parametrize("mask", [0x00, 0x01, 0x80, 0xAA, 0x55, 0xFF, 0b11011010])
    def test_each_bit_drives_its_segment(self, mask):
        ctrl, parts = _make()
        ctrl.set_segments(mask)
        for i, name in enumerate(SEGMENT_ORDER):
            lit = bool(mask & (0x80 >> i))
            assert parts[name].has_class(DEFAULT_ON_CLASS) is lit
            assert parts[name].has_class(DEFAULT_OFF_CLASS) is not lit

    def test_exactly_one_marker_after_any_call(self):
        ctrl, parts = _make()
        for mask in (0x00, 0xFF, 0x3C, 0xC3):
            ctrl.set_segments(mask)
            for part in parts.values():
                assert (part.has_class(DEFAULT_ON_CLASS)
                        != part.has_class(DEFAULT_OFF_CLASS))

    def test_transition_clears_previous_marker(self):
        ctrl, parts = _make()
        ctrl.set_segments(0xFF)
        ctrl.set_segments(0x00)
        for part in parts.values():
            assert part.classes == {DEFAULT_OFF_CLASS}

    def test_wide_value_is_masked(self):
        ctrl, parts = _make()
        ctrl.set_segments(0x180)
        assert _lit_mask(parts) == 0x80

    def test_idempotent(self):
        ctrl, parts = _make()
        ctrl.set_segments(0b10110110)
        first = _snapshot(parts)
        ctrl.set_segments(0b10110110)
        assert _snapshot(parts) == first

    def test_other_markers_untouched(self):
        ctrl, parts = _make()
        parts[SegmentName.A].classes.add("highlight")
        ctrl.set_segments(0x00)
        assert parts[SegmentName.A].has_class("highlight")


# =========================================================================
# set_digit / on / off
# =========================================================================

class TestSetDigit:
    @pytest.mark.parametrize("value", range(10))
    def test_digit_shows_glyph(self, value):
        ctrl, parts = _make()
        ctrl.set_digit(value)
        assert _lit_mask(parts) == DIGITS[value]

    @pytest.mark.parametrize("value,expected", [(10, 0), (-1, 9), (19, 9), (-10, 0), (-13, 7)])
    def test_wraps_like_non_negative_modulo(self, value, expected):
        ctrl, parts = _make()
        ctrl.set_digit(value)
        wrapped = _snapshot(parts)
        ctrl.set_digit(expected)
        assert _snapshot(parts) == wrapped

    def test_digit_turns_dp_off(self):
        ctrl, parts = _make()
        ctrl.on()
        ctrl.set_digit(8)
        assert parts[SegmentName.DP].has_class(DEFAULT_OFF_CLASS)

    def test_on_equals_all_on(self):
        ctrl, parts = _make()
        ctrl.on()
        via_on = _snapshot(parts)
        ctrl.off()
        ctrl.set_segments(ALL_ON)
        assert _snapshot(parts) == via_on
        assert _lit_mask(parts) == 0xFF

    def test_off_equals_all_off(self):
        ctrl, parts = _make()
        ctrl.off()
        via_off = _snapshot(parts)
        ctrl.on()
        ctrl.set_segments(ALL_OFF)
        assert _snapshot(parts) == via_off
        assert _lit_mask(parts) == 0


# =========================================================================
# Part set variations
# =========================================================================

class TestPartSet:
    def test_missing_dp_is_skipped(self):
        ctrl, parts = _make(include_dp=False)
        ctrl.on()
        assert SegmentName.DP not in parts
        for part in parts.values():
            assert part.has_class(DEFAULT_ON_CLASS)

    def test_missing_dp_off_and_digit(self):
        ctrl, parts = _make(include_dp=False)
        ctrl.off()
        ctrl.set_segments(0x01)
        ctrl.set_digit(4)
        assert _lit_mask(parts) == DIGITS[4]

    def test_string_keys(self):
        digit = generate(DEFAULT_SHAPE_PARAMS)
        by_str = {name.value: part for name, part in digit.parts.items()}
        ctrl = SevenSegController(by_str)
        ctrl.set_digit(7)
        assert _lit_mask(digit.parts) == DIGITS[7]

    def test_unknown_key_rejected(self):
        digit = generate(DEFAULT_SHAPE_PARAMS)
        parts = {'x': digit.parts[SegmentName.A]}
        with pytest.raises(ValueError):
            SevenSegController(parts)

    def test_custom_markers(self):
        ctrl, parts = _make(on_class="lit", off_class="dark")
        ctrl.set_digit(1)
        assert parts[SegmentName.B].classes == {"lit"}
        assert parts[SegmentName.A].classes == {"dark"}
        assert ctrl.on_class == "lit"
        assert ctrl.off_class == "dark"

    def test_state_reads_back(self):
        ctrl, _ = _make()
        ctrl.set_digit(1)
        state = ctrl.state()
        assert [n for n, lit in state.items() if lit] == [SegmentName.B, SegmentName.C]

    def test_state_before_any_call_is_all_off(self):
        ctrl, _ = _make()
        assert not any(ctrl.state().values())

    def test_controller_does_not_alter_geometry(self):
        ctrl, parts = _make()
        before = {n: p.points for n, p in parts.items() if n is not SegmentName.DP}
        ctrl.on()
        ctrl.set_digit(3)
        assert {n: p.points for n, p in parts.items() if n is not SegmentName.DP} == before

    def test_parts_property_is_a_copy(self):
        ctrl, _ = _make()
        ctrl.parts.pop(SegmentName.A)
        assert SegmentName.A in ctrl.parts
