"""Recording publish results in a note's frontmatter."""

from datetime import datetime
from pathlib import Path
from typing import Any

import frontmatter
import yaml
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from blogpress.exceptions import BlogpressError
from blogpress.logger import get_logger

logger = get_logger(__name__)


class PublishRecord(BaseModel):
    """Where and how a note was published, stored under `blog*` keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    blog_alias: str | None = None
    blog_id: str | None = None
    blog_url: str | None = None
    blog_type: str | None = None
    blog_title: str | None = None
    blog_article_id: str | None = None
    blog_article_url: str | None = None
    blog_labels: str | None = None
    blog_is_draft: bool | None = None
    blog_published: datetime | None = None
    blog_updated: datetime | None = None

    def to_frontmatter(self) -> dict[str, Any]:
        """The set values keyed by their frontmatter names (`blogArticleUrl`, ...)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def update_frontmatter(path: Path, values: PublishRecord | dict[str, Any]) -> None:
    """
    Merge values into the frontmatter of the note at path.

    Existing keys not in values are kept, as is the note body. A note without
    a frontmatter block gets one.

    """
    if isinstance(values, PublishRecord):
        values = values.to_frontmatter()

    try:
        post = frontmatter.load(path)
    except (yaml.YAMLError, ValueError) as e:
        raise BlogpressError(f"Cannot update frontmatter of {path}: {e}") from e

    post.metadata.update(values)
    path.write_text(frontmatter.dumps(post, sort_keys=False) + "\n", encoding="utf-8")
    logger.info(f"Updated frontmatter of {path}: {sorted(values)}")
