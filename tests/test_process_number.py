"""Tests for the process number mask and validators."""

from __future__ import annotations

import pytest

from processos_search.process_number import (
    PROCESS_NUMBER_LENGTH,
    apply_process_number_mask,
    is_complete_process_number,
    is_valid_process_number,
)


class TestMask:
    def test_strips_non_digits_before_masking(self):
        assert apply_process_number_mask("500091841202181304 87") == "5000918-41.2021.8.13.0487"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("", ""),
            ("abc", ""),
            ("5000", "5000"),
            ("50009184", "5000918-4"),
            ("5000918412021", "5000918-41.2021"),
            ("50009184120218", "5000918-41.2021.8"),
            ("5000918412021813", "5000918-41.2021.8.13"),
        ],
    )
    def test_partial_input(self, raw, expected):
        assert apply_process_number_mask(raw) == expected

    def test_truncates_at_twenty_digits(self):
        assert apply_process_number_mask("5000918412021813048799") == "5000918-41.2021.8.13.0487"

    def test_already_masked_input_is_unchanged(self):
        value = "5000918-41.2021.8.13.0487"
        assert apply_process_number_mask(value) == value
        assert len(value) == PROCESS_NUMBER_LENGTH


class TestValidators:
    def test_complete(self):
        assert is_complete_process_number("5000918-41.2021.8.13.0487")
        assert is_complete_process_number("  5000918-41.2021.8.13.0487 ")

    def test_incomplete(self):
        full = "5000918-41.2021.8.13.0487"
        for n in range(len(full)):
            assert not is_complete_process_number(full[:n])

    def test_complete_rejects_wrong_shape(self):
        assert not is_complete_process_number("50009184120218130487")
        assert not is_complete_process_number("5000918-41.2021.8.13.0487\n1")

    def test_valid(self):
        assert is_valid_process_number("")
        assert is_valid_process_number("   ")
        assert is_valid_process_number("5000918-41.2021.8.13.0487")
        assert not is_valid_process_number("5000918-41")
