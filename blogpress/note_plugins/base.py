"""Base plugin class for pipeline stages."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from blogpress.context import PageContext
from blogpress.note_plugins.config import PluginName

ConfigT = TypeVar("ConfigT")


class NotePlugin(ABC, Generic[ConfigT]):
    """One stage of the note to HTML pipeline."""

    name: PluginName

    top_level_only: bool = False
    """Stages that only make sense on a whole note, skipped for callout bodies"""

    def __init__(self, config: ConfigT) -> None:
        self.config = config

    def applies_to(self, ctx: PageContext) -> bool:
        return not (ctx.fragment and self.top_level_only)

    @abstractmethod
    async def process(self, ctx: PageContext) -> PageContext:
        """Rewrite ctx.content (and any side data) and return the context."""
        pass

    def setup(self) -> None:
        """Called once after the manager constructs the plugin."""
        pass

    def teardown(self) -> None:
        """Called when the manager unloads its plugins."""
        pass
