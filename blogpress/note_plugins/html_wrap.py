"""HTML wrap plugin for placing the whole post inside one styled div."""

from blogpress.context import PageContext
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import HtmlWrapPluginConfig, PluginName


class HtmlWrapPlugin(NotePlugin[HtmlWrapPluginConfig]):
    name = PluginName.HTML_WRAP
    top_level_only = True

    async def process(self, ctx: PageContext) -> PageContext:
        class_name = self.config.wrap_class_name.strip()
        if self.config.use_wrap_class and class_name:
            ctx.content = f'<div class="{class_name}">\n{ctx.content}\n</div>'
        return ctx
