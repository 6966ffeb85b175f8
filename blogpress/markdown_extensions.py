"""Python-Markdown extensions giving notes their GitHub flavoured behaviour."""

import re

from markdown import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.preprocessors import Preprocessor

from blogpress.markdown import MATH_HTML_PATTERN

LIST_ITEM_PATTERN = re.compile(r"^( *)(?:[-*+]|(\d+)[.)])[ \t]+\S")
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")

INDENT_STEP = 4


class ListNormalizePreprocessor(Preprocessor):
    """
    Rewrites list items so Python-Markdown nests and starts them like GitHub.

    Nested items may be indented by any consistent amount (vault notes mostly
    use two spaces); each item is re-indented to four spaces per level. A
    list directly below a text line gets a blank line in between, except for
    ordered lists not starting at 1, which cannot interrupt a paragraph.

    """

    def run(self, lines: list[str]) -> list[str]:
        output: list[str] = []
        open_indents: list[int] = []
        fence: str | None = None

        for line in lines:
            if fence:
                output.append(line)
                if line.strip().startswith(fence) and not line.strip(fence[0]).strip():
                    fence = None
                continue

            fence_match = FENCE_PATTERN.match(line)
            if fence_match:
                fence = fence_match.group(1)
                output.append(line)
                continue

            item = LIST_ITEM_PATTERN.match(line)
            indent = len(item.group(1)) if item else 0

            if item and not open_indents:
                previous = output[-1] if output else ""
                starts_at_one = item.group(2) is None or item.group(2) == "1"
                if indent >= INDENT_STEP or (previous.strip() and not starts_at_one):
                    item = None
                elif previous.strip():
                    output.append("")

            if item is None:
                # Unindented text ends the list, indented text continues an item
                if line.strip() and not line.startswith(" "):
                    open_indents = []
                output.append(line)
                continue

            while open_indents and indent < open_indents[-1]:
                open_indents.pop()
            if not open_indents or indent > open_indents[-1]:
                open_indents.append(indent)

            level = len(open_indents) - 1
            output.append(" " * (INDENT_STEP * level) + line[indent:])

        return output


class MathStashProcessor(InlineProcessor):
    """Stores wrapped math as raw HTML so escapes and emphasis never touch it."""

    def handleMatch(self, m, data):
        return self.md.htmlStash.store(m.group(0)), m.start(0), m.end(0)


class GithubFlavourExtension(Extension):
    """GitHub list behaviour plus verbatim math for the markdown stage."""

    def extendMarkdown(self, md):
        # After fenced code and raw HTML blocks are stashed, before block parsing
        md.preprocessors.register(ListNormalizePreprocessor(md), "list_normalize", 15)
        # Ahead of backslash escapes (180)
        md.inlinePatterns.register(
            MathStashProcessor(MATH_HTML_PATTERN.pattern, md), "math_stash", 185
        )


def makeExtension(**kwargs):
    return GithubFlavourExtension(**kwargs)
