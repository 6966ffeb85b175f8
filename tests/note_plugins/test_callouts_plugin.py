"""Tests for the callouts plugin."""

from unittest.mock import AsyncMock

from blogpress.callouts import BlockCalloutRenderer, LineScanCalloutRenderer
from blogpress.context import PageContext
from blogpress.note_plugins.callouts import CalloutsPlugin
from blogpress.note_plugins.config import CalloutsPluginConfig, PluginName


class TestCalloutsPlugin:
    """Test cases for the CalloutsPlugin."""

    def test_block_dialect_is_default(self):
        fragment_renderer = AsyncMock(return_value="<p>x</p>")

        plugin = CalloutsPlugin(CalloutsPluginConfig(), fragment_renderer)

        assert isinstance(plugin.renderer, BlockCalloutRenderer)
        assert plugin.renderer.fragment_renderer is fragment_renderer

    def test_line_dialect(self):
        plugin = CalloutsPlugin(CalloutsPluginConfig(dialect="line"))

        assert isinstance(plugin.renderer, LineScanCalloutRenderer)

    def test_non_recursive_block_dialect_ignores_fragment_renderer(self):
        plugin = CalloutsPlugin(
            CalloutsPluginConfig(recursive=False), AsyncMock(return_value="")
        )

        assert isinstance(plugin.renderer, BlockCalloutRenderer)
        assert plugin.renderer.fragment_renderer is None

    def test_runs_before_markdown(self):
        config = CalloutsPluginConfig()

        assert config.before_dependencies == [PluginName.MARKDOWN]
        assert config.after_dependencies == [PluginName.MATH]

    async def test_process_recursive(self):
        fragment_renderer = AsyncMock(return_value="<p>rendered body</p>")
        plugin = CalloutsPlugin(CalloutsPluginConfig(), fragment_renderer)
        ctx = PageContext(raw_content="", content="Intro\n\n> [!tip] Note this\n> body\n")

        result = await plugin.process(ctx)

        fragment_renderer.assert_awaited_once_with("body")
        assert result.content.startswith("Intro\n\n")
        assert '<div class="callout callout-tip">' in result.content
        assert '<div class="callout-title">Note this</div>' in result.content
        assert "<p>rendered body</p>" in result.content

    async def test_process_line_dialect(self):
        plugin = CalloutsPlugin(CalloutsPluginConfig(dialect="line"))
        ctx = PageContext(raw_content="", content="> [!warning]\n> - [ ] check\nafter")

        result = await plugin.process(ctx)

        assert '<div class="callout-title">warning</div>' in result.content
        assert "<li>☐ check</li>" in result.content
        assert result.content.endswith("after")

    def test_runs_for_fragments(self):
        plugin = CalloutsPlugin(CalloutsPluginConfig(dialect="line"))

        assert plugin.applies_to(PageContext.for_fragment("> [!note]\n> x"))
