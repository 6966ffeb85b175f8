"""Context models for passing note content through the stage plugins."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkDataSet(BaseModel):
    """Links and tags collected for a note.

    Backlinks, outlinks and tags behave as sets (sorted, unique). Labels keep
    the order in which they appear in the note.
    """

    backlinks: list[str] = []
    outlinks: list[str] = []
    labels: list[str] = []
    tags: list[str] = []

    @field_validator("backlinks", "outlinks", "tags", mode="after")
    @classmethod
    def as_sorted_set(cls, v: list[str]) -> list[str]:
        return sorted(set(v))

    @field_validator("labels", mode="after")
    @classmethod
    def unique_in_order(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class HtmlBundle(BaseModel):
    """Final output of a pipeline run, consumed by publishing and previews."""

    title: str
    content: str
    labels: list[str] = []
    tags: list[str] = []
    hidden_links: str = ""

    model_config = ConfigDict(frozen=True)

    def with_hidden_links(self) -> str:
        """HTML content with the hidden links fragment appended."""
        return self.content + self.hidden_links


class PageContext(BaseModel):
    """Working state threaded through the stage plugins."""

    # Unset for text rendered without a backing note
    source_path: Path | None = None

    raw_content: str

    # Replaced stage by stage
    content: str = ""

    title: str | None = None
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    link_data: LinkDataSet = Field(default_factory=LinkDataSet)

    # Fragment contexts are callout bodies re-entering the pipeline; stages
    # that only make sense on a whole note skip them.
    fragment: bool = False

    model_config = {"extra": "allow"}

    @classmethod
    def for_fragment(cls, content: str) -> "PageContext":
        return cls(raw_content=content, content=content, fragment=True)
