"""Tests for the diagrams plugin."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from blogpress.context import PageContext
from blogpress.exceptions import DiagramRenderError, UploadError
from blogpress.note_plugins.config import DiagramsPluginConfig
from blogpress.note_plugins.diagrams import DiagramsPlugin

MERMAID_NOTE = "Before\n```mermaid render flow\ngraph TD; A-->B\n```\nAfter\n"


class TestDiagramsPlugin:
    """Test cases for the DiagramsPlugin."""

    @pytest.fixture
    def renderer(self):
        renderer = Mock()
        renderer.output_suffix = ".svg"
        renderer.supports = Mock(side_effect=lambda language: language == "mermaid")
        renderer.render = AsyncMock(return_value=b"<svg/>")
        return renderer

    @pytest.fixture
    def assets(self):
        assets = Mock()
        assets.upload_bytes = AsyncMock(
            side_effect=lambda data, name: f"https://img.example/{name}"
        )
        return assets

    @pytest.fixture
    def plugin(self, assets, renderer):
        return DiagramsPlugin(DiagramsPluginConfig(), assets, renderer)

    async def test_block_becomes_uploaded_image(self, plugin, assets, renderer):
        result = await plugin.process(PageContext(raw_content="", content=MERMAID_NOTE))

        assert result.content == (
            "Before\n![flow](https://img.example/flow.svg)\nAfter\n"
        )
        renderer.render.assert_awaited_once_with("mermaid", "graph TD; A-->B\n")
        assets.upload_bytes.assert_awaited_once_with(b"<svg/>", "flow.svg")

    async def test_unknown_language_stays_a_code_block(self, plugin, renderer):
        content = "```python render nope\nprint(1)\n```\n"

        result = await plugin.process(PageContext(raw_content="", content=content))

        assert result.content == "```python\nprint(1)\n```\n"
        renderer.render.assert_not_awaited()

    async def test_plain_code_blocks_are_ignored(self, plugin, renderer):
        content = "```mermaid\ngraph TD\n```\n"

        result = await plugin.process(PageContext(raw_content="", content=content))

        assert result.content == content
        renderer.render.assert_not_awaited()

    async def test_render_failure_becomes_inline_error(self, plugin, renderer):
        renderer.render = AsyncMock(
            side_effect=[DiagramRenderError("mermaid", "exit code 1: boom"), b"<svg/>"]
        )
        content = (
            "```mermaid render first\nbad\n```\n"
            "```mermaid render second\ngraph TD\n```\n"
        )

        result = await plugin.process(PageContext(raw_content="", content=content))

        assert result.content == (
            "Error rendering mermaid diagram: exit code 1: boom\n"
            "![second](https://img.example/second.svg)\n"
        )

    async def test_upload_failure_becomes_inline_error(self, plugin, assets):
        assets.upload_bytes = AsyncMock(side_effect=UploadError("host down"))

        result = await plugin.process(PageContext(raw_content="", content=MERMAID_NOTE))

        assert "Error rendering mermaid diagram: host down" in result.content

    async def test_untitled_diagram_gets_numbered_name(self, plugin, assets):
        content = "```mermaid render\ngraph TD\n```"

        result = await plugin.process(PageContext(raw_content="", content=content))

        assert result.content == "![diagram-1.svg](https://img.example/diagram-1.svg)"

    async def test_renders_never_overlap(self, plugin, renderer):
        active = 0
        peak = 0

        async def render(language, source):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return b"<svg/>"

        renderer.render = AsyncMock(side_effect=render)
        contexts = [
            PageContext(raw_content="", content=f"```mermaid render d{i}\ngraph\n```")
            for i in range(3)
        ]

        await asyncio.gather(*(plugin.process(ctx) for ctx in contexts))

        assert renderer.render.await_count == 3
        assert peak == 1
