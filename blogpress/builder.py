"""Core builder turning a vault note into publishable HTML."""

from pathlib import Path

from blogpress.assets import AssetResolver, DirectoryUploader, ImageUploader
from blogpress.config import BlogpressConfig
from blogpress.context import HtmlBundle, PageContext
from blogpress.diagrams import CommandDiagramRenderer, DiagramRenderer
from blogpress.linkdata import LinkDataSetBuilder
from blogpress.logger import get_logger
from blogpress.note_plugins import PluginManager
from blogpress.note_plugins.config import (
    BaseNotePluginConfig,
    BoundsPluginConfig,
    CalloutsPluginConfig,
    DiagramsPluginConfig,
    FrontmatterPluginConfig,
    HighlightPluginConfig,
    HtmlWrapPluginConfig,
    ImageLinksPluginConfig,
    ImageParagraphsPluginConfig,
    InternalLinksPluginConfig,
    ListRepairPluginConfig,
    MarkdownPluginConfig,
    MathPluginConfig,
    PluginName,
    YoutubePluginConfig,
)
from blogpress.vault import Vault

logger = get_logger(__name__)


def bridge_disabled_plugins(
    configs: list[BaseNotePluginConfig],
) -> list[BaseNotePluginConfig]:
    """
    Re-point dependencies on disabled stages at whatever those stages ran after.

    Disabling `highlight` then leaves `math` running after `diagrams` instead
    of failing dependency resolution.

    """
    disabled = {config.name: config for config in configs if not config.enabled}
    if not disabled:
        return configs

    def resolve(names: list[PluginName], seen: frozenset = frozenset()) -> list[PluginName]:
        resolved: list[PluginName] = []
        for name in names:
            if name in disabled and name not in seen:
                resolved.extend(
                    resolve(disabled[name].after_dependencies, seen | {name})
                )
            elif name not in disabled:
                resolved.append(name)
        return list(dict.fromkeys(resolved))

    bridged = []
    for config in configs:
        if not config.enabled:
            bridged.append(config)
            continue
        bridged.append(
            config.model_copy(
                update={
                    "after_dependencies": resolve(config.after_dependencies),
                    "before_dependencies": [
                        name
                        for name in config.before_dependencies
                        if name not in disabled
                    ],
                }
            )
        )
    return bridged


class HtmlBuilder:
    """
    Runs notes through the stage pipeline and assembles the `HtmlBundle`.

    Collaborators default to what the config describes: the vault at
    `vault_dir`, uploads written to `upload_dir`, and diagrams rendered with
    the configured commands. Tests and other callers can pass their own.

    """

    def __init__(
        self,
        config: BlogpressConfig,
        vault: Vault | None = None,
        uploader: ImageUploader | None = None,
        diagram_renderer: DiagramRenderer | None = None,
    ) -> None:
        self.config = config
        self.vault = vault or Vault(config.vault_dir)
        self.uploader = uploader or DirectoryUploader(
            config.upload_dir, config.upload_base_url
        )
        self.diagram_renderer = diagram_renderer or CommandDiagramRenderer(
            config.diagram_commands
        )
        self.assets = AssetResolver(self.vault, self.uploader)

        self.default_plugins: list[BaseNotePluginConfig] = [
            FrontmatterPluginConfig(),
            BoundsPluginConfig(),
            ImageLinksPluginConfig(),
            InternalLinksPluginConfig(),
            DiagramsPluginConfig(),
            HighlightPluginConfig(),
            MathPluginConfig(),
            CalloutsPluginConfig(),
            MarkdownPluginConfig(),
            ListRepairPluginConfig(),
            YoutubePluginConfig(),
            ImageParagraphsPluginConfig(),
            HtmlWrapPluginConfig(),
        ]

        self.plugin_manager = PluginManager(
            services={
                "global_config": config,
                "vault": self.vault,
                "assets": self.assets,
                "diagram_renderer": self.diagram_renderer,
                "fragment_renderer": self.render_fragment,
            }
        )
        self._setup_plugins()

        url_key = self._internal_links_config().url_key
        self.link_data_builder = LinkDataSetBuilder(
            self.vault, config.links, url_key=url_key
        )

    def _setup_plugins(self) -> None:
        """Setup default plugins, letting configured plugins replace them by name."""
        all_plugins = list(self.default_plugins)

        for plugin in self.config.note_plugins:
            all_plugins = [p for p in all_plugins if p.name != plugin.name]
            all_plugins.append(plugin)

        # Load all plugins together so dependency resolution sees everything
        self.plugin_manager.load_plugins_from_config(
            bridge_disabled_plugins(all_plugins)
        )

    def _internal_links_config(self) -> InternalLinksPluginConfig:
        for plugin in self.config.note_plugins:
            if isinstance(plugin, InternalLinksPluginConfig):
                return plugin
        return InternalLinksPluginConfig()

    async def build_bundle(self, path: Path) -> HtmlBundle:
        """Convert the note at path and collect its labels, tags and hidden links."""
        raw_content = self.vault.read_text(path)
        ctx = PageContext(
            source_path=path,
            raw_content=raw_content,
            content=raw_content,
            link_data=self.link_data_builder.build(path),
        )

        ctx = await self.plugin_manager.process_page(ctx)

        return HtmlBundle(
            title=ctx.title or path.stem,
            content=ctx.content,
            labels=ctx.link_data.labels,
            tags=ctx.link_data.tags,
            hidden_links=self.link_data_builder.hidden_links_html(ctx.link_data),
        )

    async def render_markdown(self, text: str) -> str:
        """Run markdown that has no backing note through the whole pipeline."""
        ctx = PageContext(raw_content=text, content=text)
        ctx = await self.plugin_manager.process_page(ctx)
        return ctx.content

    async def render_fragment(self, content: str) -> str:
        """Render a callout body, skipping stages that only apply to whole notes."""
        ctx = await self.plugin_manager.process_page(PageContext.for_fragment(content))
        return ctx.content

    def teardown(self) -> None:
        self.plugin_manager.teardown()
