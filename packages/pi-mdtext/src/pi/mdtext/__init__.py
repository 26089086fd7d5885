"""pi-mdtext: render markdown as word-wrapped plain or ANSI-colored terminal text."""

from pi.mdtext.convert import markdown_to_text, markdown_to_text_no_metadata
from pi.mdtext.metadata import markdown_metadata
from pi.mdtext.nodes import Fragment, LineBreak, Node, Rule, Scope, Text
from pi.mdtext.options import RenderOptions, options_from_env, terminal_columns
from pi.mdtext.reflow import reflow, reflow_stream
from pi.mdtext.renderer import TextRenderer
from pi.mdtext.stream import decode, encode
from pi.mdtext.table import Align, TableAlignment
from pi.mdtext.walker import MarkdownWalker
from pi.mdtext.width import Word, visible_width
from pi.mdtext.wrap import wrap

__version__ = "0.1.0"

__all__ = [
    "Align",
    "Fragment",
    "LineBreak",
    "MarkdownWalker",
    "Node",
    "RenderOptions",
    "Rule",
    "Scope",
    "TableAlignment",
    "Text",
    "TextRenderer",
    "Word",
    "decode",
    "encode",
    "markdown_metadata",
    "markdown_to_text",
    "markdown_to_text_no_metadata",
    "options_from_env",
    "reflow",
    "reflow_stream",
    "terminal_columns",
    "visible_width",
    "wrap",
]
