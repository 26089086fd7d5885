"""Render options, terminal width probing and environment overrides."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from pi.mdtext.table import TableAlignment

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 79

WIDTH_ENV = "PI_MDTEXT_WIDTH"
NO_COLOR_ENV = "NO_COLOR"


def terminal_columns(default: int = DEFAULT_WIDTH) -> int:
    """Column count of the terminal on stdout, or *default* when there is none."""
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (ValueError, OSError):
        logger.debug("no terminal on stdout, using %d columns", default)
        return default


@dataclass(frozen=True)
class RenderOptions:
    """Options for one render call.

    ``width`` may be positive for an absolute column count, ``0`` for the
    terminal width, or negative for the terminal width less that many
    columns.
    """

    width: int = 0
    color: bool = False
    first_line_prefix: str = ""
    continuation_prefix: str = ""
    table_alignment: TableAlignment = field(default_factory=TableAlignment)

    def resolved_width(self, columns: int | None = None) -> int:
        if self.width >= 1:
            return self.width
        if columns is None:
            columns = terminal_columns()
        return max(1, columns + self.width)


def options_from_env(environ: Mapping[str, str] | None = None, **overrides: Any) -> RenderOptions:
    """Build options from the environment, then apply keyword *overrides*.

    ``PI_MDTEXT_WIDTH`` sets the width; any value of ``NO_COLOR`` turns
    color off (color is on otherwise).
    """
    if environ is None:
        environ = os.environ
    options = RenderOptions(color=NO_COLOR_ENV not in environ)

    raw_width = environ.get(WIDTH_ENV)
    if raw_width:
        try:
            options = replace(options, width=int(raw_width))
        except ValueError:
            logger.warning("ignoring %s=%r: not an integer", WIDTH_ENV, raw_width)

    return replace(options, **overrides)
