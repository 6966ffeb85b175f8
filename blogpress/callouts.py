"""
Callout blocks: `> [!kind] Title` blockquotes rendered as styled HTML.

Two renderers share one interface. The line-scan renderer walks the note line
by line and turns each callout body into paragraphs and nested lists itself.
The block renderer extracts whole callouts with a single regex and sends each
body back through the pipeline, so callouts may hold anything a note can.

"""

import html
import re
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from re import Match

from blogpress.markdown import MATH_HTML_PATTERN, substitute_concurrently

CALLOUT_HEADER_PATTERN = re.compile(r"^>\s?\[!([\w-]+)\][+-]?\s*(.*?)\s*$")

CALLOUT_BLOCK_PATTERN = re.compile(
    r"^>[ \t]?\[!([\w-]+)\][+-]?[ \t]*([^\n]*)\n?"
    r"((?:(?!>[ \t]?\[!)>[^\n]*(?:\n|$))*)",
    re.MULTILINE,
)

QUOTE_MARKER_PATTERN = re.compile(r"^>[ \t]?")

CHECKED_BOX = "☑"
UNCHECKED_BOX = "☐"

CHECKBOX_ITEM_PATTERN = re.compile(r"^([ \t]*-[ \t]+)\[([ xX])\]", re.MULTILINE)

FragmentRenderer = Callable[[str], Awaitable[str]]


@dataclass
class CalloutBlock:
    """One callout, with the quote markers already removed from its body."""

    kind: str
    title: str = ""
    body_lines: list[str] = field(default_factory=list)

    @property
    def css_class(self) -> str:
        return f"callout callout-{self.kind.lower()}"

    @property
    def display_title(self) -> str:
        return self.title or self.kind


def strip_quote_marker(line: str) -> str:
    return QUOTE_MARKER_PATTERN.sub("", line, count=1)


def format_callout(block: CalloutBlock, body_html: str, inline_styles: bool) -> str:
    """Wrap rendered body HTML in the callout container divs."""
    title = block.display_title
    if inline_styles:
        title = apply_inline_styles(title)
        body_html = apply_inline_styles(body_html)

    return "\n".join(
        [
            f'<div class="{block.css_class}">',
            f'<div class="callout-title">{title}</div>',
            '<div class="callout-content">',
            body_html,
            "</div>",
            "</div>",
        ]
    )


class _BodyBuilder:
    """Accumulates callout body HTML: an open paragraph plus a stack of open lists."""

    def __init__(self) -> None:
        self.html: list[str] = []
        self.paragraph: list[str] = []
        self.list_stack: list[int] = []

    def flush_paragraph(self) -> None:
        if self.paragraph:
            self.html.append(f"<p>{'<br>'.join(self.paragraph)}</p>")
            self.paragraph = []

    def set_list_depth(self, depth: int) -> None:
        while len(self.list_stack) > depth:
            self.list_stack.pop()
            self.html.append("</ul>")
        while len(self.list_stack) < depth:
            self.list_stack.append(len(self.list_stack))
            self.html.append("<ul>")

    def close_lists(self) -> None:
        self.set_list_depth(0)


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def replace_checkboxes(text: str) -> str:
    """Turn `- [ ]` and `- [x]` list items in markdown into glyph items."""
    return CHECKBOX_ITEM_PATTERN.sub(
        lambda m: m.group(1) + (UNCHECKED_BOX if m.group(2) == " " else CHECKED_BOX),
        text,
    )


def _checkbox(item: str) -> str:
    if item.startswith("[ ]"):
        return f"{UNCHECKED_BOX} {item[3:].strip()}"
    if item.startswith(("[x]", "[X]")):
        return f"{CHECKED_BOX} {item[3:].strip()}"
    return item


def render_callout_body(lines: list[str]) -> str:
    """
    Render callout body lines into paragraphs and nested `<ul>` lists.

    Blank lines end paragraphs, consecutive text lines join with `<br>`. A line
    starting with `-` is a list item whose nesting level comes from its
    indentation relative to the least indented item, one level per indent
    step. Any other text line closes every open list.

    """
    cleaned = [strip_quote_marker(line).expandtabs(4) for line in lines]

    list_indents = [
        _indent_width(line) for line in cleaned if line.lstrip().startswith("-")
    ]
    min_indent = min(list_indents, default=0)
    relative_steps = sorted({indent - min_indent for indent in list_indents} - {0})
    indent_unit = relative_steps[0] if relative_steps else 1

    builder = _BodyBuilder()
    for line in cleaned:
        stripped = line.strip()

        if not stripped:
            builder.flush_paragraph()
            continue

        if stripped.startswith("-"):
            builder.flush_paragraph()
            level = max(0, (_indent_width(line) - min_indent) // indent_unit) + 1
            builder.set_list_depth(level)
            builder.html.append(f"<li>{_checkbox(stripped[1:].strip())}</li>")
        else:
            builder.close_lists()
            builder.paragraph.append(stripped)

    builder.flush_paragraph()
    builder.close_lists()
    return "\n".join(builder.html)


INLINE_CODE_PATTERN = re.compile(r"(?<!`)`([^`\n]+)`(?!`)")
INLINE_RULES = [
    (re.compile(r"!\[([^\]]*)\]\(([^)\s]+)\)"), r'<img src="\2" alt="\1">'),
    (re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]+)\)"), r'<a href="\2">\1</a>'),
    (re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*"), r"<b>\1</b>"),
    (re.compile(r"(?<![*\w])\*(?=[^\s*])(.+?)(?<=[^\s*])\*(?![*\w])"), r"<em>\1</em>"),
    (re.compile(r"==(?=\S)(.+?)(?<=\S)=="), r"<mark>\1</mark>"),
]


def apply_inline_styles(text: str) -> str:
    """Render inline markdown emphasis inside already structured HTML.

    Code spans are converted first and their contents left untouched, as is
    wrapped math.
    """
    parts = []
    cursor = 0
    for match in MATH_HTML_PATTERN.finditer(text):
        parts.append(_style_outside_math(text[cursor : match.start()]))
        parts.append(match.group(0))
        cursor = match.end()
    parts.append(_style_outside_math(text[cursor:]))
    return "".join(parts)


def _style_outside_math(text: str) -> str:
    parts = []
    cursor = 0
    for match in INLINE_CODE_PATTERN.finditer(text):
        parts.append(_style_segment(text[cursor : match.start()]))
        parts.append(f"<code>{html.escape(match.group(1), quote=False)}</code>")
        cursor = match.end()
    parts.append(_style_segment(text[cursor:]))
    return "".join(parts)


def _style_segment(segment: str) -> str:
    for pattern, replacement in INLINE_RULES:
        segment = pattern.sub(replacement, segment)
    return segment


class CalloutRenderer(ABC):
    """Replaces every callout in a markdown document with its HTML."""

    @abstractmethod
    async def render(self, content: str) -> str:
        pass


class LineScanCalloutRenderer(CalloutRenderer):
    """
    Scans line by line. A header line opens a callout, quoted lines extend it,
    and the first other line closes it and is kept verbatim. A new header
    closes the previous callout.

    """

    def __init__(self, inline_styles: bool = True) -> None:
        self.inline_styles = inline_styles

    async def render(self, content: str) -> str:
        return self.render_text(content)

    def render_text(self, content: str) -> str:
        output: list[str] = []
        current: CalloutBlock | None = None

        for line in content.split("\n"):
            header = CALLOUT_HEADER_PATTERN.match(line)
            if header:
                if current:
                    output.append(self._format(current))
                current = CalloutBlock(kind=header.group(1), title=header.group(2))
            elif current and line.startswith(">"):
                current.body_lines.append(strip_quote_marker(line))
            else:
                if current:
                    output.append(self._format(current))
                    current = None
                output.append(line)

        if current:
            output.append(self._format(current))

        return "\n".join(output)

    def _format(self, block: CalloutBlock) -> str:
        body = render_callout_body(block.body_lines)
        return f"\n{format_callout(block, body, self.inline_styles)}\n"


class BlockCalloutRenderer(CalloutRenderer):
    """
    Extracts whole callouts with one multi-line pattern. With a fragment
    renderer each body runs through the pipeline again, all callouts
    concurrently. Without one the line-scan body renderer is used.

    """

    def __init__(
        self,
        fragment_renderer: FragmentRenderer | None = None,
        inline_styles: bool = True,
    ) -> None:
        self.fragment_renderer = fragment_renderer
        self.inline_styles = inline_styles

    async def render(self, content: str) -> str:
        return await substitute_concurrently(
            CALLOUT_BLOCK_PATTERN, content, self._render_match
        )

    async def _render_match(self, match: Match[str]) -> str:
        block = CalloutBlock(
            kind=match.group(1),
            title=match.group(2).strip(),
            body_lines=[strip_quote_marker(line) for line in match.group(3).splitlines()],
        )

        if self.fragment_renderer is None:
            body = render_callout_body(block.body_lines)
            html_block = format_callout(block, body, self.inline_styles)
        else:
            body = await self.fragment_renderer(
                replace_checkboxes("\n".join(block.body_lines))
            )
            if self.inline_styles:
                block.title = apply_inline_styles(block.display_title)
            html_block = format_callout(block, body.strip(), inline_styles=False)

        return f"\n{html_block}\n\n"
