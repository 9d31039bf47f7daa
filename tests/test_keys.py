"""Tests for key decoding."""

import pytest
import readchar

from git_utils.selection_list.keys import (
    Accept,
    AppendQueryChar,
    Cancel,
    ClearOrCancel,
    DeleteQueryChar,
    MoveActionFocus,
    MoveSelection,
    decode,
)


class TestDecode:
    def test_ctrl_c(self):
        assert decode(readchar.key.CTRL_C) == Cancel()

    def test_escape(self):
        assert decode(readchar.key.ESC) == ClearOrCancel()

    @pytest.mark.parametrize("key", [readchar.key.ENTER, "\r", "\n"])
    def test_enter_variants(self, key):
        assert decode(key) == Accept()

    @pytest.mark.parametrize("key", [readchar.key.BACKSPACE, "\x7f", "\b"])
    def test_backspace_variants(self, key):
        assert decode(key) == DeleteQueryChar()

    def test_arrows(self):
        assert decode(readchar.key.UP) == MoveSelection(-1)
        assert decode(readchar.key.DOWN) == MoveSelection(1)
        assert decode(readchar.key.LEFT) == MoveActionFocus(-1)
        assert decode(readchar.key.RIGHT) == MoveActionFocus(1)

    @pytest.mark.parametrize("char", ["a", "Z", "7", "/", "-", " ", "é"])
    def test_printable(self, char):
        assert decode(char) == AppendQueryChar(char)

    def test_vim_letters_are_query_input(self):
        assert decode("j") == AppendQueryChar("j")
        assert decode("k") == AppendQueryChar("k")

    @pytest.mark.parametrize("key", ["", None, "\x1b[15~", "\x01", readchar.key.F1])
    def test_unknown_sequences_ignored(self, key):
        assert decode(key) is None
