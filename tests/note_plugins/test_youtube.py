"""Tests for the YouTube plugin."""

import pytest
from bs4 import BeautifulSoup

from blogpress.context import PageContext
from blogpress.note_plugins.config import YoutubePluginConfig
from blogpress.note_plugins.youtube import YoutubePlugin, youtube_embed_url


class TestYoutubeEmbedUrl:
    def test_watch_url(self):
        assert (
            youtube_embed_url("https://www.youtube.com/watch?v=ABC123")
            == "https://www.youtube.com/embed/ABC123"
        )

    def test_short_link_with_timestamp(self):
        assert (
            youtube_embed_url("https://youtu.be/ABC123?t=42")
            == "https://www.youtube.com/embed/ABC123?start=42"
        )

    def test_shorts_url(self):
        assert (
            youtube_embed_url("https://youtube.com/shorts/XYZ_987-a")
            == "https://www.youtube.com/embed/XYZ_987-a"
        )

    def test_extra_params_are_kept(self):
        assert (
            youtube_embed_url("https://www.youtube.com/watch?v=ABC123&t=10s&list=PL1")
            == "https://www.youtube.com/embed/ABC123?start=10&list=PL1"
        )

    def test_other_urls(self):
        assert youtube_embed_url("https://example.com/watch?v=ABC123") is None
        assert youtube_embed_url("https://img.example/pic.png") is None


class TestYoutubePlugin:
    """Test cases for the YoutubePlugin."""

    @pytest.fixture
    def plugin(self):
        return YoutubePlugin(YoutubePluginConfig())

    async def test_image_becomes_iframe(self, plugin):
        content = '<img src="https://www.youtube.com/watch?v=ABC123" alt="t">'

        result = await plugin.process(PageContext(raw_content="", content=content))

        soup = BeautifulSoup(result.content, "html.parser")
        iframe = soup.find("iframe")
        assert "ABC123" in iframe["src"]
        assert iframe["src"] == "https://www.youtube.com/embed/ABC123"
        assert iframe["title"] == "t"
        assert iframe.parent["class"] == ["video-container"]
        assert soup.find("img") is None

    async def test_paragraph_around_video_is_replaced(self, plugin):
        content = (
            '<p>intro</p>\n<p><img alt="Talk" src="https://youtu.be/ABC123" /></p>'
        )

        result = await plugin.process(PageContext(raw_content="", content=content))

        soup = BeautifulSoup(result.content, "html.parser")
        assert [p.get_text() for p in soup.find_all("p")] == ["intro"]
        assert soup.find("div", class_="video-container").find("iframe")["title"] == (
            "Talk"
        )

    async def test_video_inside_text_keeps_paragraph(self, plugin):
        content = '<p>Watch <img alt="v" src="https://youtu.be/ABC123"> now</p>'

        result = await plugin.process(PageContext(raw_content="", content=content))

        soup = BeautifulSoup(result.content, "html.parser")
        paragraph = soup.find("p")
        assert paragraph.find("iframe") is not None
        assert "Watch" in paragraph.get_text()

    async def test_other_html_is_untouched(self, plugin):
        content = (
            '<p><a href="https://youtube.com/watch?v=ABC123">link</a><br />'
            '<img src="https://img.example/pic.png" alt="pic" /></p>'
        )

        result = await plugin.process(PageContext(raw_content="", content=content))

        assert result.content == content

    async def test_custom_container_class(self):
        plugin = YoutubePlugin(YoutubePluginConfig(container_class="embed"))
        content = '<img src="https://youtu.be/ABC123" alt="x">'

        result = await plugin.process(PageContext(raw_content="", content=content))

        assert '<div class="embed">' in result.content
