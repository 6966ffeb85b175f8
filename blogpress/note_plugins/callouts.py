"""Callouts plugin for rendering `> [!kind]` blocks as styled HTML."""

from blogpress.callouts import (
    BlockCalloutRenderer,
    CalloutRenderer,
    FragmentRenderer,
    LineScanCalloutRenderer,
)
from blogpress.context import PageContext
from blogpress.logger import get_logger
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import CalloutsPluginConfig, PluginName

logger = get_logger(__name__)


class CalloutsPlugin(NotePlugin[CalloutsPluginConfig]):
    """Plugin to render callouts with the configured dialect.

    The block dialect hands each callout body to `fragment_renderer`, which
    runs it through the whole pipeline again. Without a fragment renderer,
    or with `recursive: false`, bodies are rendered by the line-scan body
    renderer instead.
    """

    name = PluginName.CALLOUTS

    def __init__(
        self,
        config: CalloutsPluginConfig,
        fragment_renderer: FragmentRenderer | None = None,
    ) -> None:
        super().__init__(config)
        self.renderer = self._build_renderer(fragment_renderer)

    def _build_renderer(
        self, fragment_renderer: FragmentRenderer | None
    ) -> CalloutRenderer:
        if self.config.dialect == "line":
            return LineScanCalloutRenderer(inline_styles=self.config.inline_styles)

        if self.config.recursive and fragment_renderer is None:
            logger.debug("No fragment renderer available, callout bodies render flat")

        return BlockCalloutRenderer(
            fragment_renderer=fragment_renderer if self.config.recursive else None,
            inline_styles=self.config.inline_styles,
        )

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = await self.renderer.render(ctx.content)
        return ctx
