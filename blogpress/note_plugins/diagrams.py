"""Diagrams plugin for rendering ```` ```mermaid render alt ```` code blocks."""

import asyncio
import re
from re import Match

from blogpress.assets import AssetResolver
from blogpress.context import PageContext
from blogpress.diagrams import DiagramRenderer, diagram_file_name
from blogpress.exceptions import BlogpressError, DiagramRenderError
from blogpress.logger import get_logger
from blogpress.markdown import substitute_spans
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import DiagramsPluginConfig, PluginName

logger = get_logger(__name__)

DIAGRAM_BLOCK_PATTERN = re.compile(
    r"^```[ \t]*(\w+)[ \t]+render[ \t]*([^\n]*?)[ \t]*\n(.*?)^```[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


class DiagramsPlugin(NotePlugin[DiagramsPluginConfig]):
    """
    Plugin to replace diagram blocks with an uploaded image of the diagram.

    Blocks render one at a time. Callout bodies run through the pipeline
    concurrently, so the lock is shared across every page this plugin sees.
    A failed render becomes an inline error message and never stops the run.

    """

    name = PluginName.DIAGRAMS

    def __init__(
        self,
        config: DiagramsPluginConfig,
        assets: AssetResolver,
        diagram_renderer: DiagramRenderer,
    ) -> None:
        super().__init__(config)
        self.assets = assets
        self.diagram_renderer = diagram_renderer
        self._lock = asyncio.Lock()
        self._rendered = 0

    async def process(self, ctx: PageContext) -> PageContext:
        matches = list(DIAGRAM_BLOCK_PATTERN.finditer(ctx.content))
        if not matches:
            return ctx

        replacements = []
        for match in matches:
            async with self._lock:
                replacements.append(await self._render_block(match))

        ctx.content = substitute_spans(ctx.content, matches, replacements)
        return ctx

    async def _render_block(self, match: Match[str]) -> str:
        language, alt, source = match.group(1), match.group(2).strip(), match.group(3)

        if not self.diagram_renderer.supports(language):
            logger.debug(f"No diagram renderer for {language}, leaving block as code")
            return f"```{language}\n{source.rstrip()}\n```"

        self._rendered += 1
        file_name = diagram_file_name(
            alt, self._rendered, self.diagram_renderer.output_suffix
        )

        try:
            image = await self.diagram_renderer.render(language, source)
            url = await self.assets.upload_bytes(image, file_name)
        except DiagramRenderError as e:
            logger.error(f"Failed to render {language} diagram '{alt}': {e.message}")
            return f"Error rendering {language} diagram: {e.message}"
        except BlogpressError as e:
            logger.error(f"Failed to upload {language} diagram '{alt}': {e}")
            return f"Error rendering {language} diagram: {e}"

        return f"![{alt or file_name}]({url})"
