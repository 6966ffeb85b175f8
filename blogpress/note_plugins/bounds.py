"""Bounds plugin for publishing only the part of a note between two markers."""

from blogpress.context import PageContext
from blogpress.note_plugins.base import NotePlugin
from blogpress.note_plugins.config import BoundsPluginConfig, PluginName


def clip_to_markers(
    content: str,
    start_marker: str = "",
    end_marker: str = "",
    include_start_marker: bool = False,
    include_end_marker: bool = False,
) -> str:
    """Clip content to the region between the markers.

    A marker that is unset or absent leaves that side unclipped. The end
    marker is only searched for after the start position.
    """
    start_index = 0
    end_index = len(content)

    if start_marker:
        marker_index = content.find(start_marker)
        if marker_index != -1:
            start_index = (
                marker_index
                if include_start_marker
                else marker_index + len(start_marker)
            )

    if end_marker:
        marker_index = content.find(end_marker, start_index)
        if marker_index != -1:
            end_index = (
                marker_index + len(end_marker) if include_end_marker else marker_index
            )

    return content[start_index:end_index].strip()


class BoundsPlugin(NotePlugin[BoundsPluginConfig]):
    """Plugin to clip the note to its configured start and end markers."""

    name = PluginName.BOUNDS
    top_level_only = True

    async def process(self, ctx: PageContext) -> PageContext:
        ctx.content = clip_to_markers(
            ctx.content,
            start_marker=self.config.start_marker,
            end_marker=self.config.end_marker,
            include_start_marker=self.config.include_start_marker,
            include_end_marker=self.config.include_end_marker,
        )
        return ctx
