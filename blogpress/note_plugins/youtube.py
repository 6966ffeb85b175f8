"""YouTube plugin for turning linked video images into embedded players."""

import re
from urllib.parse import parse_qsl, urlencode, urlparse

from bs4 import BeautifulSoup, Tag

from blogpress.context import PageContext
from blogpress.logger import get_logger
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import PluginName, YoutubePluginConfig

logger = get_logger(__name__)

YOUTUBE_URL_PATTERN = re.compile(
    r"^https?://(?:www\.|m\.)?"
    r"(?:youtube\.com/(?:watch\?(?:[^#]*&)?v=|shorts/)|youtu\.be/)"
    r"([\w-]{6,})"
)


def youtube_embed_url(url: str) -> str | None:
    """Embed URL for a YouTube watch, shorts or short-link URL, else None.

    Query parameters other than the video id are carried over, with a `t`
    timestamp becoming the player's `start` offset.
    """
    match = YOUTUBE_URL_PATTERN.match(url)
    if not match:
        return None

    params = []
    for key, value in parse_qsl(urlparse(url).query):
        if key == "v":
            continue
        if key == "t":
            key, value = "start", value.rstrip("s")
        params.append((key, value))

    embed_url = f"https://www.youtube.com/embed/{match.group(1)}"
    return f"{embed_url}?{urlencode(params)}" if params else embed_url


class YoutubePlugin(NotePlugin[YoutubePluginConfig]):
    """Plugin to replace `![title](youtube url)` images with an iframe player."""

    name = PluginName.YOUTUBE

    async def process(self, ctx: PageContext) -> PageContext:
        if "youtu" not in ctx.content:
            return ctx

        soup = BeautifulSoup(ctx.content, "html.parser")
        replaced = 0

        for img in soup.find_all("img"):
            if not isinstance(img, Tag):
                continue

            src = img.get("src", "")
            embed_url = youtube_embed_url(src) if isinstance(src, str) else None
            if embed_url is None:
                continue

            container = self._build_player(soup, embed_url, str(img.get("alt", "")))

            # A paragraph holding only the image is replaced as a whole
            parent = img.parent
            if (
                isinstance(parent, Tag)
                and parent.name == "p"
                and not parent.get_text(strip=True)
                and len(parent.find_all(True)) == 1
            ):
                parent.replace_with(container)
            else:
                img.replace_with(container)
            replaced += 1

        if replaced:
            logger.debug(f"Embedded {replaced} YouTube video(s)")
            ctx.content = str(soup)

        return ctx

    def _build_player(self, soup: BeautifulSoup, embed_url: str, title: str) -> Tag:
        container = soup.new_tag("div")
        container["class"] = self.config.container_class

        iframe = soup.new_tag("iframe")
        iframe["src"] = embed_url
        iframe["title"] = title
        iframe["frameborder"] = "0"
        iframe["allow"] = (
            "accelerometer; autoplay; clipboard-write; encrypted-media; "
            "gyroscope; picture-in-picture"
        )
        iframe["allowfullscreen"] = ""
        container.append(iframe)
        return container
