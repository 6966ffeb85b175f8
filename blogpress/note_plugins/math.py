"""Math plugin for wrapping LaTeX so a client side renderer can find it."""

import re

from blogpress.context import PageContext
from blogpress.markdown import transform_outside_code
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import MathPluginConfig, PluginName

DISPLAY_MATH_PATTERN = re.compile(r"(?<!\\)\$\$(.+?)(?<!\\)\$\$", re.DOTALL)

# Single dollars only; `$$` and escaped `\$` never open or close inline math.
# The opening `$` is followed by a non-space, the closing one preceded by a
# non-space and not followed by a digit, so prices like `$5 and $10` are prose.
INLINE_MATH_PATTERN = re.compile(
    r"(?<![\\$])\$(?![\s$])((?:\\\$|[^\n$])+?)(?<![\s\\$])\$(?![$\d])"
)


def wrap_math(text: str) -> str:
    """Wrap `$$...$$` in a display div and `$...$` in an inline span.

    The LaTeX itself is left exactly as written.
    """

    def wrap(segment: str) -> str:
        segment = DISPLAY_MATH_PATTERN.sub(
            r'<div class="math math-display">$$\1$$</div>', segment
        )
        return INLINE_MATH_PATTERN.sub(
            r'<span class="math math-inline">$\1$</span>', segment
        )

    return transform_outside_code(text, wrap)


class MathPlugin(NotePlugin[MathPluginConfig]):
    name = PluginName.MATH
    top_level_only = True

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = wrap_math(ctx.content)
        return ctx
