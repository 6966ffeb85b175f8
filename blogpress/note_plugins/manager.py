"""Plugin manager for loading and executing pipeline stages."""

import inspect
import time
from typing import Any

from blogpress.context import PageContext
from blogpress.logger import get_logger
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.bounds import BoundsPlugin
from blogpress.note_plugins.callouts import CalloutsPlugin
from blogpress.note_plugins.config import PluginConfig, PluginName
from blogpress.note_plugins.diagrams import DiagramsPlugin
from blogpress.note_plugins.frontmatter import FrontmatterPlugin
from blogpress.note_plugins.highlight import HighlightPlugin
from blogpress.note_plugins.html_wrap import HtmlWrapPlugin
from blogpress.note_plugins.image_links import ImageLinksPlugin
from blogpress.note_plugins.image_paragraphs import ImageParagraphsPlugin
from blogpress.note_plugins.internal_links import InternalLinksPlugin
from blogpress.note_plugins.list_repair import ListRepairPlugin
from blogpress.note_plugins.markdown import MarkdownPlugin
from blogpress.note_plugins.math import MathPlugin
from blogpress.note_plugins.youtube import YoutubePlugin
from blogpress.plugins import BasePluginManager

logger = get_logger(__name__)


class PluginManager(BasePluginManager[PluginConfig, NotePlugin]):
    """Manages loading and execution of pipeline stages.

    Collaborators are handed to plugin constructors by parameter name. A
    plugin asking for `vault` receives the vault, one asking for `assets`
    receives the asset resolver, and so on for every key in `services`.
    """

    def __init__(self, services: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.services = {
            name: service
            for name, service in (services or {}).items()
            if service is not None
        }
        self._plugin_registry: dict[PluginName, type[NotePlugin]] = {
            PluginName.FRONTMATTER: FrontmatterPlugin,
            PluginName.BOUNDS: BoundsPlugin,
            PluginName.IMAGE_LINKS: ImageLinksPlugin,
            PluginName.INTERNAL_LINKS: InternalLinksPlugin,
            PluginName.DIAGRAMS: DiagramsPlugin,
            PluginName.HIGHLIGHT: HighlightPlugin,
            PluginName.MATH: MathPlugin,
            PluginName.CALLOUTS: CalloutsPlugin,
            PluginName.MARKDOWN: MarkdownPlugin,
            PluginName.LIST_REPAIR: ListRepairPlugin,
            PluginName.YOUTUBE: YoutubePlugin,
            PluginName.IMAGE_PARAGRAPHS: ImageParagraphsPlugin,
            PluginName.HTML_WRAP: HtmlWrapPlugin,
        }

    def load_plugin(self, name: str, config: PluginConfig) -> NotePlugin:
        """Load and configure a plugin."""
        if name not in self._plugin_registry:
            raise ValueError(f"Unknown plugin: {name}")

        plugin_class = self._plugin_registry[name]
        plugin = plugin_class(**self._get_constructor_params(plugin_class, config))
        plugin.setup()
        return plugin

    def _get_constructor_params(
        self, plugin_class: type[NotePlugin], config: PluginConfig
    ) -> dict[str, Any]:
        """Match constructor parameters to the plugin config and known services.

        - 'config': gets the plugin config
        - a name in `services`: gets that service
        - other params with defaults: skipped
        - other required params: error

        """
        signature = inspect.signature(plugin_class.__init__)
        params: dict[str, Any] = {}

        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue

            if param_name == "config":
                params[param_name] = config
            elif param_name in self.services:
                params[param_name] = self.services[param_name]
            elif param.default is not inspect.Parameter.empty:
                continue
            else:
                raise ValueError(
                    f"Plugin {plugin_class.__name__} requires '{param_name}' "
                    f"but none was provided"
                )

        return params

    async def process_page(self, ctx: PageContext) -> PageContext:
        """Run a context through every loaded plugin that applies to it."""
        for plugin in self.plugins:
            if not plugin.applies_to(ctx):
                continue

            start_time = time.perf_counter()
            ctx = await plugin.process(ctx)
            duration = time.perf_counter() - start_time
            logger.info(
                f"Plugin {plugin.name.value} took {duration:.4f}s"
                f"{' (fragment)' if ctx.fragment else ''}"
            )
        return ctx

    def get_plugin_by_name(self, name: PluginName) -> NotePlugin | None:
        """Get a loaded plugin by its name."""
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        return None
