"""Frontmatter plugin for removing the YAML metadata block from a note."""

import re

import yaml
from frontmatter import loads as fm_loads

from blogpress.context import PageContext
from blogpress.logger import get_logger
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import FrontmatterPluginConfig, PluginName

logger = get_logger(__name__)

FRONTMATTER_BLOCK_PATTERN = re.compile(r"\A---[ \t]*\n.*?\n---[ \t]*(?:\n|\Z)", re.DOTALL)


def strip_frontmatter(text: str) -> str:
    """Remove a leading `---` delimited block without parsing it."""
    return FRONTMATTER_BLOCK_PATTERN.sub("", text, count=1)


class FrontmatterPlugin(NotePlugin[FrontmatterPluginConfig]):
    """Plugin to split the frontmatter block off the note body."""

    name = PluginName.FRONTMATTER
    top_level_only = True

    async def process(self, ctx: PageContext) -> PageContext:
        """Record frontmatter values on the context and drop the block."""
        try:
            post = fm_loads(ctx.content)
            ctx.frontmatter = dict(post.metadata)
            ctx.content = post.content
        except (yaml.YAMLError, ValueError) as e:
            # A broken block still must not leak into the published post
            logger.warning(f"Unreadable frontmatter in {ctx.source_path}: {e}")
            ctx.content = strip_frontmatter(ctx.content)

        title = ctx.frontmatter.get(self.config.title_key)
        if not ctx.title and title:
            ctx.title = str(title)

        return ctx
