"""List repair plugin for closing list items before a nested list opens."""

import re

from blogpress.context import PageContext
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import ListRepairPluginConfig, PluginName

OPEN_ITEM_BEFORE_LIST_PATTERN = re.compile(
    r"(<li>(?:(?!</li>|<li>).)*?)(<[uo]l>)", re.DOTALL
)
LIST_END_BEFORE_ITEM_END_PATTERN = re.compile(r"</(ul|ol)>\s*</li>")


def repair_nested_lists(html: str) -> str:
    """
    Flatten `<li>Text<ul>...</ul></li>` into `<li>Text</li><ul>...</ul>`.

    Every list item still open when a nested list starts is closed first,
    then the item end that used to follow the nested list is dropped.

    """
    html = OPEN_ITEM_BEFORE_LIST_PATTERN.sub(r"\1</li>\2", html)
    return LIST_END_BEFORE_ITEM_END_PATTERN.sub(r"</\1>", html)


class ListRepairPlugin(NotePlugin[ListRepairPluginConfig]):
    name = PluginName.LIST_REPAIR

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = repair_nested_lists(ctx.content)
        return ctx
