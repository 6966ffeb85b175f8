"""Image links plugin for uploading `![[image.png]]` embeds."""

from re import Match

from blogpress.assets import AssetResolver
from blogpress.context import PageContext
from blogpress.exceptions import BlogpressError
from blogpress.logger import get_logger
from blogpress.markdown import (
    IMAGE_EMBED_PATTERN,
    strip_extension,
    substitute_concurrently,
)
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import ImageLinksPluginConfig, PluginName

logger = get_logger(__name__)


class ImageLinksPlugin(NotePlugin[ImageLinksPluginConfig]):
    """Plugin to replace embedded vault images with uploaded image links.

    All embeds in a note upload concurrently. An embed whose file is missing,
    or whose upload fails, stays in the text as written.
    """

    name = PluginName.IMAGE_LINKS

    def __init__(self, config: ImageLinksPluginConfig, assets: AssetResolver) -> None:
        super().__init__(config)
        self.assets = assets

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = await substitute_concurrently(
            IMAGE_EMBED_PATTERN, ctx.content, self._resolve_embed
        )
        return ctx

    async def _resolve_embed(self, match: Match[str]) -> str:
        name = match.group(1).strip()
        file_name = name.rsplit("/", 1)[-1]

        try:
            url = await self.assets.upload_file(file_name)
        except BlogpressError as e:
            logger.error(f"Upload failed for {file_name}: {e}")
            return match.group(0)

        if url is None:
            logger.warning(f"Image not found in vault: {file_name}")
            return match.group(0)

        return f"![{strip_extension(file_name)}]({url})"
