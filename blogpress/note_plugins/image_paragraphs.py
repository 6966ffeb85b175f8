"""Image paragraphs plugin for unwrapping `<p>` tags that hold only an image."""

import re

from blogpress.context import PageContext
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import ImageParagraphsPluginConfig, PluginName

IMAGE_PARAGRAPH_PATTERN = re.compile(r"<p>\s*(<img\b[^>]*>)\s*</p>")


def unwrap_image_paragraphs(html: str) -> str:
    return IMAGE_PARAGRAPH_PATTERN.sub(r"\1", html)


class ImageParagraphsPlugin(NotePlugin[ImageParagraphsPluginConfig]):
    """Plugin to keep lone images out of paragraph block context."""

    name = PluginName.IMAGE_PARAGRAPHS

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = unwrap_image_paragraphs(ctx.content)
        return ctx
