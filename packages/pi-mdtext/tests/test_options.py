"""Tests for pi.mdtext.options -- widths and environment overrides."""

from __future__ import annotations

import logging
import os

import pytest

from pi.mdtext.options import DEFAULT_WIDTH, RenderOptions, options_from_env, terminal_columns
from pi.mdtext.table import Align, TableAlignment


class TestResolvedWidth:
    def test_positive_width_is_absolute(self) -> None:
        assert RenderOptions(width=40).resolved_width(columns=100) == 40

    def test_zero_means_terminal_width(self) -> None:
        assert RenderOptions(width=0).resolved_width(columns=100) == 100

    def test_negative_is_relative_to_terminal(self) -> None:
        assert RenderOptions(width=-10).resolved_width(columns=100) == 90

    def test_never_below_one(self) -> None:
        assert RenderOptions(width=-200).resolved_width(columns=80) == 1

    def test_probes_terminal_when_columns_not_given(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pi.mdtext.options.terminal_columns", lambda default=DEFAULT_WIDTH: 50)
        assert RenderOptions(width=-5).resolved_width() == 45


class TestTerminalColumns:
    def test_falls_back_without_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def no_terminal(fd: int) -> os.terminal_size:
            raise OSError("not a tty")

        monkeypatch.setattr(os, "get_terminal_size", no_terminal)
        assert terminal_columns() == DEFAULT_WIDTH
        assert terminal_columns(default=60) == 60


class TestOptionsFromEnv:
    """Environment variables, then keyword overrides."""

    def test_defaults(self) -> None:
        options = options_from_env({})
        assert options.color is True
        assert options.width == 0
        assert options.table_alignment == TableAlignment()

    def test_no_color(self) -> None:
        assert options_from_env({"NO_COLOR": ""}).color is False

    def test_width_from_env(self) -> None:
        assert options_from_env({"PI_MDTEXT_WIDTH": "60"}).width == 60

    def test_invalid_width_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="pi.mdtext.options"):
            options = options_from_env({"PI_MDTEXT_WIDTH": "wide"})
        assert options.width == 0
        assert "PI_MDTEXT_WIDTH" in caplog.text

    def test_overrides_win(self) -> None:
        options = options_from_env(
            {"PI_MDTEXT_WIDTH": "60"},
            width=30,
            color=False,
            table_alignment=TableAlignment(default=Align.CENTER),
        )
        assert options.width == 30
        assert options.color is False
        assert options.table_alignment.default is Align.CENTER
