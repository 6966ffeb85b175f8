"""Internal links plugin for turning `[[note]]` links into published URLs."""

from re import Match

from blogpress.assets import AssetResolver
from blogpress.context import PageContext
from blogpress.exceptions import BlogpressError
from blogpress.logger import get_logger
from blogpress.markdown import WIKI_LINK_PATTERN, WikiLink, substitute_concurrently
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import InternalLinksPluginConfig, PluginName
from blogpress.vault import Vault

logger = get_logger(__name__)


class InternalLinksPlugin(NotePlugin[InternalLinksPluginConfig]):
    """Plugin to resolve wiki links against the vault.

    A link is tried as an SVG attachment first, then as a note carrying a
    published URL in its frontmatter. Links that resolve to neither are
    reduced to their display text.
    """

    name = PluginName.INTERNAL_LINKS

    def __init__(
        self,
        config: InternalLinksPluginConfig,
        vault: Vault,
        assets: AssetResolver,
    ) -> None:
        super().__init__(config)
        self.vault = vault
        self.assets = assets

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = await substitute_concurrently(
            WIKI_LINK_PATTERN, ctx.content, self._resolve_link
        )
        return ctx

    async def _resolve_link(self, match: Match[str]) -> str:
        link = WikiLink.parse(match.group(1))

        # Image names are left for the image stage or kept literal on purpose
        if link.is_image:
            return match.group(0)

        name = link.target.rsplit("/", 1)[-1]

        svg_url = await self._upload_svg(name)
        if svg_url:
            return f"[{link.display}]({svg_url})"

        note_url = self._published_url(name)
        if note_url:
            return f"[{link.display}]({note_url})"

        logger.debug(f"No published target for [[{match.group(1)}]]")
        return link.display

    async def _upload_svg(self, name: str) -> str | None:
        try:
            return await self.assets.upload_file(f"{name}.svg")
        except BlogpressError as e:
            logger.error(f"Upload failed for {name}.svg: {e}")
            return None

    def _published_url(self, name: str) -> str | None:
        note_name = name if name.lower().endswith(".md") else f"{name}.md"
        path = self.vault.find_file_by_name(note_name)
        if path is None:
            return None

        url = self.vault.get_metadata(path).frontmatter.get(self.config.url_key)
        return str(url) if url else None
