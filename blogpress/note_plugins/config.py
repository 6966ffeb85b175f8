"""Plugin configuration models."""

from typing import Annotated, Literal

from pydantic import Field

from blogpress.plugins import BasePluginConfig, PluginNameEnum


class PluginName(PluginNameEnum):
    """Enum for plugin names."""

    FRONTMATTER = "frontmatter"
    BOUNDS = "bounds"
    IMAGE_LINKS = "image_links"
    INTERNAL_LINKS = "internal_links"
    DIAGRAMS = "diagrams"
    HIGHLIGHT = "highlight"
    MATH = "math"
    CALLOUTS = "callouts"
    MARKDOWN = "markdown"
    LIST_REPAIR = "list_repair"
    YOUTUBE = "youtube"
    IMAGE_PARAGRAPHS = "image_paragraphs"
    HTML_WRAP = "html_wrap"


class BaseNotePluginConfig(BasePluginConfig[PluginName]):
    """Base configuration for all note plugins."""

    name: PluginName


class FrontmatterPluginConfig(BaseNotePluginConfig):
    """Configuration for the frontmatter plugin.

    Example YAML configuration:
    ```yaml
    - name: frontmatter
      title_key: blogTitle
    ```
    """

    name: Literal[PluginName.FRONTMATTER] = PluginName.FRONTMATTER

    title_key: str = Field(
        default="blogTitle",
        description="Frontmatter key that overrides the note title",
    )


class BoundsPluginConfig(BaseNotePluginConfig):
    """Configuration for clipping a note to the text between two markers.

    Example YAML configuration:
    ```yaml
    - name: bounds
      start_marker: "%% publish %%"
      include_start_marker: false
      end_marker: "%% end %%"
      include_end_marker: false
    ```
    """

    name: Literal[PluginName.BOUNDS] = PluginName.BOUNDS
    after_dependencies: list[PluginName] = [PluginName.FRONTMATTER]

    start_marker: str = ""
    include_start_marker: bool = False
    end_marker: str = ""
    include_end_marker: bool = False


class ImageLinksPluginConfig(BaseNotePluginConfig):
    """Configuration for uploading `![[image.png]]` embeds.

    Example YAML configuration:
    ```yaml
    - name: image_links
    ```
    """

    name: Literal[PluginName.IMAGE_LINKS] = PluginName.IMAGE_LINKS
    after_dependencies: list[PluginName] = [PluginName.BOUNDS]


class InternalLinksPluginConfig(BaseNotePluginConfig):
    """Configuration for resolving `[[note]]` links.

    Example YAML configuration:
    ```yaml
    - name: internal_links
      url_key: blogArticleUrl
    ```
    """

    name: Literal[PluginName.INTERNAL_LINKS] = PluginName.INTERNAL_LINKS
    after_dependencies: list[PluginName] = [PluginName.IMAGE_LINKS]

    url_key: str = Field(
        default="blogArticleUrl",
        description="Frontmatter key holding a linked note's published URL",
    )


class DiagramsPluginConfig(BaseNotePluginConfig):
    """Configuration for rendering ```` ```mermaid render alt ```` blocks.

    Example YAML configuration:
    ```yaml
    - name: diagrams
    ```
    """

    name: Literal[PluginName.DIAGRAMS] = PluginName.DIAGRAMS
    after_dependencies: list[PluginName] = [PluginName.INTERNAL_LINKS]


class HighlightPluginConfig(BaseNotePluginConfig):
    """Configuration for `==highlight==` markup."""

    name: Literal[PluginName.HIGHLIGHT] = PluginName.HIGHLIGHT
    after_dependencies: list[PluginName] = [PluginName.DIAGRAMS]


class MathPluginConfig(BaseNotePluginConfig):
    """Configuration for wrapping LaTeX for a client side renderer."""

    name: Literal[PluginName.MATH] = PluginName.MATH
    after_dependencies: list[PluginName] = [PluginName.HIGHLIGHT]


class CalloutsPluginConfig(BaseNotePluginConfig):
    """Configuration for the callouts plugin.

    Example YAML configuration:
    ```yaml
    - name: callouts
      dialect: block      # or "line"
      recursive: true    # block dialect: run bodies through the pipeline
      inline_styles: true
    ```
    """

    name: Literal[PluginName.CALLOUTS] = PluginName.CALLOUTS
    after_dependencies: list[PluginName] = [PluginName.MATH]
    before_dependencies: list[PluginName] = [PluginName.MARKDOWN]

    dialect: Literal["block", "line"] = "block"
    recursive: bool = True
    inline_styles: bool = True


class MarkdownPluginConfig(BaseNotePluginConfig):
    """Configuration for the markdown plugin.

    Example YAML configuration:
    ```yaml
    - name: markdown
      extensions:
        - fenced_code
        - tables
        - nl2br
    ```
    """

    name: Literal[PluginName.MARKDOWN] = PluginName.MARKDOWN

    extensions: list[str] = Field(
        default_factory=lambda: [
            "fenced_code",
            "tables",
            "nl2br",
            "sane_lists",
            "footnotes",
        ],
        description="Python-Markdown extensions approximating GitHub flavour",
    )


class ListRepairPluginConfig(BaseNotePluginConfig):
    """Configuration for flattening `<li>` elements that hold a nested list."""

    name: Literal[PluginName.LIST_REPAIR] = PluginName.LIST_REPAIR
    after_dependencies: list[PluginName] = [PluginName.MARKDOWN]


class YoutubePluginConfig(BaseNotePluginConfig):
    """Configuration for turning YouTube image links into embeds.

    Example YAML configuration:
    ```yaml
    - name: youtube
      container_class: video-container
    ```
    """

    name: Literal[PluginName.YOUTUBE] = PluginName.YOUTUBE
    after_dependencies: list[PluginName] = [PluginName.LIST_REPAIR]

    container_class: str = "video-container"


class ImageParagraphsPluginConfig(BaseNotePluginConfig):
    """Configuration for unwrapping paragraphs that only hold an image."""

    name: Literal[PluginName.IMAGE_PARAGRAPHS] = PluginName.IMAGE_PARAGRAPHS
    after_dependencies: list[PluginName] = [PluginName.YOUTUBE]


class HtmlWrapPluginConfig(BaseNotePluginConfig):
    """Configuration for wrapping the output in a single styled div.

    Example YAML configuration:
    ```yaml
    - name: html_wrap
      use_wrap_class: true
      wrap_class_name: post-body
    ```
    """

    name: Literal[PluginName.HTML_WRAP] = PluginName.HTML_WRAP
    after_dependencies: list[PluginName] = [PluginName.IMAGE_PARAGRAPHS]

    use_wrap_class: bool = False
    wrap_class_name: str = ""


PluginConfig = Annotated[
    FrontmatterPluginConfig
    | BoundsPluginConfig
    | ImageLinksPluginConfig
    | InternalLinksPluginConfig
    | DiagramsPluginConfig
    | HighlightPluginConfig
    | MathPluginConfig
    | CalloutsPluginConfig
    | MarkdownPluginConfig
    | ListRepairPluginConfig
    | YoutubePluginConfig
    | ImageParagraphsPluginConfig
    | HtmlWrapPluginConfig,
    Field(discriminator="name"),
]
