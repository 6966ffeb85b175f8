"""Tests for the stage plugin manager."""

from unittest.mock import AsyncMock, Mock

import pytest

from blogpress.context import PageContext
from blogpress.note_plugins.config import (
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
from blogpress.note_plugins.manager import PluginManager

ALL_CONFIGS = [
    HtmlWrapPluginConfig(),
    MarkdownPluginConfig(),
    CalloutsPluginConfig(),
    FrontmatterPluginConfig(),
    YoutubePluginConfig(),
    BoundsPluginConfig(),
    DiagramsPluginConfig(),
    ImageLinksPluginConfig(),
    ListRepairPluginConfig(),
    InternalLinksPluginConfig(),
    MathPluginConfig(),
    ImageParagraphsPluginConfig(),
    HighlightPluginConfig(),
]


class TestPluginManager:
    """Test cases for PluginManager."""

    @pytest.fixture
    def services(self, tmp_path):
        return {
            "vault": Mock(),
            "assets": Mock(),
            "diagram_renderer": Mock(),
            "fragment_renderer": AsyncMock(return_value=""),
        }

    def test_default_stage_order(self, services):
        manager = PluginManager(services=services)

        manager.load_plugins_from_config(ALL_CONFIGS)

        assert [plugin.name for plugin in manager.plugins] == [
            PluginName.FRONTMATTER,
            PluginName.BOUNDS,
            PluginName.IMAGE_LINKS,
            PluginName.INTERNAL_LINKS,
            PluginName.DIAGRAMS,
            PluginName.HIGHLIGHT,
            PluginName.MATH,
            PluginName.CALLOUTS,
            PluginName.MARKDOWN,
            PluginName.LIST_REPAIR,
            PluginName.YOUTUBE,
            PluginName.IMAGE_PARAGRAPHS,
            PluginName.HTML_WRAP,
        ]

    def test_services_are_injected_by_name(self, services):
        manager = PluginManager(services=services)

        manager.load_plugins_from_config(
            [ImageLinksPluginConfig(after_dependencies=[])]
        )

        assert manager.plugins[0].assets is services["assets"]

    def test_missing_required_service(self):
        manager = PluginManager()

        with pytest.raises(ValueError, match="requires 'assets'"):
            manager.load_plugins_from_config(
                [ImageLinksPluginConfig(after_dependencies=[])]
            )

    def test_optional_service_may_be_missing(self):
        manager = PluginManager(services={"fragment_renderer": None})

        manager.load_plugins_from_config(
            [CalloutsPluginConfig(after_dependencies=[], before_dependencies=[])]
        )

        assert manager.plugins[0].renderer.fragment_renderer is None

    def test_unknown_plugin(self):
        manager = PluginManager()

        with pytest.raises(ValueError, match="Unknown plugin"):
            manager.load_plugin("nope", Mock())

    def test_missing_dependency(self):
        manager = PluginManager()

        with pytest.raises(ValueError, match="depends on 'frontmatter'"):
            manager.load_plugins_from_config([BoundsPluginConfig()])

    def test_disabled_dependency_counts_as_missing(self):
        manager = PluginManager()

        with pytest.raises(ValueError, match="not enabled"):
            manager.load_plugins_from_config(
                [FrontmatterPluginConfig(enabled=False), BoundsPluginConfig()]
            )

    def test_circular_dependency(self):
        manager = PluginManager()

        with pytest.raises(ValueError, match="Circular dependency"):
            manager.load_plugins_from_config(
                [
                    FrontmatterPluginConfig(after_dependencies=[PluginName.BOUNDS]),
                    BoundsPluginConfig(),
                ]
            )

    def test_before_dependency_orders_plugins(self):
        manager = PluginManager()

        manager.load_plugins_from_config(
            [
                MarkdownPluginConfig(),
                HighlightPluginConfig(
                    after_dependencies=[],
                    before_dependencies=[PluginName.MARKDOWN],
                ),
            ]
        )

        assert [plugin.name for plugin in manager.plugins] == [
            PluginName.HIGHLIGHT,
            PluginName.MARKDOWN,
        ]

    async def test_process_page_skips_top_level_stages_for_fragments(self):
        manager = PluginManager()
        manager.load_plugins_from_config(
            [
                HighlightPluginConfig(
                    after_dependencies=[],
                    before_dependencies=[PluginName.MARKDOWN],
                ),
                MarkdownPluginConfig(),
                ListRepairPluginConfig(),
            ]
        )

        page = await manager.process_page(PageContext(raw_content="", content="==a=="))
        fragment = await manager.process_page(PageContext.for_fragment("==a=="))

        assert page.content == "<p><mark>a</mark></p>"
        assert fragment.content == "<p>==a==</p>"

    def test_get_plugin_by_name(self, services):
        manager = PluginManager(services=services)
        manager.load_plugins_from_config(ALL_CONFIGS)

        assert manager.get_plugin_by_name(PluginName.MATH).name == PluginName.MATH

        manager.teardown()

        assert manager.get_plugin_by_name(PluginName.MATH) is None
