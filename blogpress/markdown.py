import asyncio
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from re import Match, Pattern

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "svg", "webp")

IMAGE_EMBED_PATTERN = re.compile(
    r"!\[\[([^\]|]+?\.(?:png|jpe?g|gif|svg|webp))(?:\|[^\]]*)?\]\]",
    re.IGNORECASE,
)

# `![[note]]` transclusions are left alone, only plain links are resolved
WIKI_LINK_PATTERN = re.compile(r"(?<!!)\[\[([^\]]+)\]\]")

ANY_WIKI_LINK_PATTERN = re.compile(r"!?\[\[([^\]]+)\]\]")

INLINE_TAG_PATTERN = re.compile(r"(?<![\w#&/])#([A-Za-z_][\w/-]*)")

CODE_PATTERN = re.compile(
    r"^[ \t>]*(`{3,}|~{3,}).*?^[ \t>]*\1[^\n]*$|`[^`\n]+`",
    re.MULTILINE | re.DOTALL,
)

# Math already wrapped for the client side renderer; its LaTeX stays verbatim
MATH_HTML_PATTERN = re.compile(
    r'<(span|div) class="math math-(?:inline|display)">.*?</\1>', re.DOTALL
)

IMAGE_SUFFIX_PATTERN = re.compile(
    r"\.(?:%s)$" % "|".join(IMAGE_EXTENSIONS), re.IGNORECASE
)


@dataclass(frozen=True)
class WikiLink:
    """The parts of a `[[target#heading|alias]]` token."""

    target: str
    heading: str | None = None
    alias: str | None = None

    @property
    def display(self) -> str:
        return self.alias or self.target

    @property
    def is_image(self) -> bool:
        return bool(IMAGE_SUFFIX_PATTERN.search(self.target))

    @classmethod
    def parse(cls, inner: str) -> "WikiLink":
        target, _, alias = inner.partition("|")
        target, _, heading = target.partition("#")
        return cls(
            target=target.strip(),
            heading=heading.strip() or None,
            alias=alias.strip() or None,
        )


def strip_extension(name: str) -> str:
    """Drop the final extension of a file name, keeping any folder prefix."""
    return re.sub(r"\.[^/.]+$", "", name)


def find_wiki_link_targets(text: str) -> list[str]:
    """Targets of every wiki link or embed in text, in order of appearance."""
    targets = []
    for match in ANY_WIKI_LINK_PATTERN.finditer(text):
        target = WikiLink.parse(match.group(1)).target
        if target:
            targets.append(target)
    return targets


def find_inline_tags(text: str) -> list[str]:
    """`#tag` tokens outside of code, returned with their leading `#`."""
    without_code = CODE_PATTERN.sub(" ", text)
    return [f"#{tag}" for tag in INLINE_TAG_PATTERN.findall(without_code)]


def transform_outside_code(text: str, transform: Callable[[str], str]) -> str:
    """Apply transform to every part of text that is not a code block or span."""
    parts = []
    cursor = 0
    for match in CODE_PATTERN.finditer(text):
        parts.append(transform(text[cursor : match.start()]))
        parts.append(match.group(0))
        cursor = match.end()
    parts.append(transform(text[cursor:]))
    return "".join(parts)


def substitute_spans(text: str, matches: list[Match[str]], values: list[str]) -> str:
    """Rebuild text, replacing each match span with its value in source order."""
    parts = []
    cursor = 0
    for match, value in zip(matches, values, strict=True):
        parts.append(text[cursor : match.start()])
        parts.append(value)
        cursor = match.end()
    parts.append(text[cursor:])
    return "".join(parts)


async def substitute_concurrently(
    pattern: Pattern[str],
    text: str,
    resolve: Callable[[Match[str]], Awaitable[str]],
) -> str:
    """Resolve every match of pattern concurrently, then substitute in one pass.

    Phase one collects the ordered matches and starts one resolution per
    distinct token. Phase two waits for all of them and splices the results
    back by span, so completion order never affects the output. Repeated
    tokens share a single resolution and therefore the same value.
    """
    matches = list(pattern.finditer(text))
    if not matches:
        return text

    pending: dict[str, Awaitable[str]] = {}
    for match in matches:
        if match.group(0) not in pending:
            pending[match.group(0)] = resolve(match)

    resolved = dict(zip(pending, await asyncio.gather(*pending.values())))
    return substitute_spans(
        text, matches, [resolved[match.group(0)] for match in matches]
    )
