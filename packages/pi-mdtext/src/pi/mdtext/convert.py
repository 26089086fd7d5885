"""Markdown to terminal text: metadata, render, reflow."""

from __future__ import annotations

import logging

from pi.mdtext.marks import resolve
from pi.mdtext.metadata import Metadata, markdown_metadata, strip_summary_marks
from pi.mdtext.options import RenderOptions
from pi.mdtext.reflow import normalize_newlines, reflow
from pi.mdtext.renderer import TextRenderer
from pi.mdtext.walker import MarkdownWalker

logger = logging.getLogger(__name__)


def markdown_to_text(markdown: str, options: RenderOptions | None = None) -> tuple[Metadata, str]:
    """Split off any leading metadata and render the rest.

    See :func:`pi.mdtext.metadata.markdown_metadata` for the metadata format.
    """
    metadata, position = markdown_metadata(markdown)
    return metadata, markdown_to_text_no_metadata(markdown[position:], options)


def markdown_to_text_no_metadata(markdown: str, options: RenderOptions | None = None) -> str:
    """Render *markdown* as wrapped terminal text without looking for metadata."""
    options = options or RenderOptions()
    width = options.resolved_width()
    logger.debug("rendering %d chars at width %d (color=%s)", len(markdown), width, options.color)

    renderer = TextRenderer(color=options.color, table_alignment=options.table_alignment)
    fragment = MarkdownWalker(renderer).walk(strip_summary_marks(markdown))
    if not fragment:
        return ""

    text = reflow(
        normalize_newlines(fragment.nodes),
        options.first_line_prefix,
        options.continuation_prefix,
        width,
    )
    return resolve(text)
