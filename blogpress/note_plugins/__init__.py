"""Pipeline stages for turning a note into blog HTML."""

from .base import NotePlugin
from .bounds import BoundsPlugin
from .callouts import CalloutsPlugin
from .diagrams import DiagramsPlugin
from .frontmatter import FrontmatterPlugin
from .highlight import HighlightPlugin
from .html_wrap import HtmlWrapPlugin
from .image_links import ImageLinksPlugin
from .image_paragraphs import ImageParagraphsPlugin
from .internal_links import InternalLinksPlugin
from .list_repair import ListRepairPlugin
from .manager import PluginManager
from .markdown import MarkdownPlugin
from .math import MathPlugin
from .youtube import YoutubePlugin

__all__ = [
    "NotePlugin",
    "PluginManager",
    "BoundsPlugin",
    "CalloutsPlugin",
    "DiagramsPlugin",
    "FrontmatterPlugin",
    "HighlightPlugin",
    "HtmlWrapPlugin",
    "ImageLinksPlugin",
    "ImageParagraphsPlugin",
    "InternalLinksPlugin",
    "ListRepairPlugin",
    "MarkdownPlugin",
    "MathPlugin",
    "YoutubePlugin",
]
