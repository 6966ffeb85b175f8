"""Markdown plugin for converting markdown to HTML."""

import markdown

from blogpress.context import PageContext
from blogpress.exceptions import MarkdownConversionError
from blogpress.markdown_extensions import GithubFlavourExtension
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import MarkdownPluginConfig, PluginName


class MarkdownPlugin(NotePlugin[MarkdownPluginConfig]):
    """Plugin to convert markdown to HTML.

    `nl2br` gives single newlines their line break meaning, and callout HTML
    already in the text passes through as raw block HTML. Lists start and
    nest the way GitHub renders them, and wrapped math is never rewritten.
    """

    name = PluginName.MARKDOWN

    def __init__(self, config: MarkdownPluginConfig) -> None:
        super().__init__(config)
        self.md = markdown.Markdown(
            extensions=[*config.extensions, GithubFlavourExtension()]
        )

    async def process(self, ctx: PageContext) -> PageContext:
        """Convert markdown content to HTML."""
        # Reset the markdown processor state to prevent footnote numbering
        # leakage between notes and callout bodies
        self.md.reset()

        try:
            ctx.content = self.md.convert(ctx.content)
        except Exception as e:
            raise MarkdownConversionError(
                f"Could not convert {ctx.source_path or 'fragment'} to HTML: {e}"
            ) from e

        return ctx
