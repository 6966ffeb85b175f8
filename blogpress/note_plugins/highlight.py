"""Highlight plugin for `==marked==` text."""

import re

from blogpress.context import PageContext
from blogpress.markdown import transform_outside_code
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import HighlightPluginConfig, PluginName

HIGHLIGHT_PATTERN = re.compile(r"==(?=\S)(.+?)(?<=\S)==")


def highlight_marks(text: str) -> str:
    return transform_outside_code(
        text, lambda segment: HIGHLIGHT_PATTERN.sub(r"<mark>\1</mark>", segment)
    )


class HighlightPlugin(NotePlugin[HighlightPluginConfig]):
    """Plugin to turn `==text==` into `<mark>` before markdown sees the `=` signs."""

    name = PluginName.HIGHLIGHT
    top_level_only = True

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = highlight_marks(ctx.content)
        return ctx
