"""Tests for recording publish results in note frontmatter."""

from datetime import datetime, timezone

import frontmatter
import pytest

from blogpress.exceptions import BlogpressError
from blogpress.publish import PublishRecord, update_frontmatter


class TestPublishRecord:
    def test_only_set_values_use_frontmatter_names(self):
        record = PublishRecord(blog_article_id="123", blog_is_draft=False)

        assert record.to_frontmatter() == {
            "blogArticleId": "123",
            "blogIsDraft": False,
        }

    def test_accepts_frontmatter_names(self):
        record = PublishRecord.model_validate(
            {"blogArticleUrl": "https://blog.example/p", "blogLabels": "a, b"}
        )

        assert record.blog_article_url == "https://blog.example/p"
        assert record.blog_labels == "a, b"

    def test_dates_are_serialised(self):
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        values = PublishRecord(blog_published=when).to_frontmatter()

        assert values["blogPublished"].startswith("2024-05-01T12:00:00")


class TestUpdateFrontmatter:
    """Test cases for update_frontmatter."""

    def test_merges_into_existing_block(self, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("---\ntitle: Keep\nblogArticleId: old\n---\nBody text\n")

        update_frontmatter(
            note,
            PublishRecord(blog_article_id="123", blog_article_url="https://b.example/p"),
        )

        post = frontmatter.load(note)
        assert post.metadata == {
            "title": "Keep",
            "blogArticleId": "123",
            "blogArticleUrl": "https://b.example/p",
        }
        assert post.content == "Body text"

    def test_creates_block_when_missing(self, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("Just a body\n")

        update_frontmatter(note, {"blogIsDraft": True})

        text = note.read_text()
        assert text.startswith("---\n")
        post = frontmatter.load(note)
        assert post.metadata == {"blogIsDraft": True}
        assert post.content == "Just a body"

    def test_invalid_frontmatter(self, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("---\nkey: [unclosed\n---\nBody\n")

        with pytest.raises(BlogpressError):
            update_frontmatter(note, {"blogIsDraft": True})
