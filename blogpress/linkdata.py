"""Collecting the links, labels and tags around a note."""

from pathlib import Path

from blogpress.config import LinkFilterConfig
from blogpress.context import LinkDataSet
from blogpress.logger import get_logger
from blogpress.vault import Vault, strip_note_suffix

logger = get_logger(__name__)

RELATED_LINKS_HEADING = '<h2 class="hidden link-heading">Related Links</h2>\n'
BACKLINKS_HEADING = '<h3 class="hidden link-heading">Backlinks</h3>\n'
OUTLINKS_HEADING = '<h3 class="hidden link-heading">Outlinks</h3>\n'


class LinkDataSetBuilder:
    """
    Builds the `LinkDataSet` for a note from the vault and renders its hidden
    links fragment.

    Outlinks and backlinks pass the same filter: optional allowed prefixes,
    then excluded file extensions. Labels are body links starting with a
    label prefix. Tags lose any entry containing an excluded substring.

    """

    def __init__(
        self, vault: Vault, filters: LinkFilterConfig, url_key: str = "blogArticleUrl"
    ) -> None:
        self.vault = vault
        self.filters = filters
        self.url_key = url_key

    def build(self, path: Path) -> LinkDataSet:
        metadata = self.vault.get_metadata(path)

        return LinkDataSet(
            backlinks=self.filter_links(self.vault.get_backlinks(path)),
            outlinks=self.filter_links(
                [*metadata.frontmatter_links, *metadata.links]
            ),
            labels=self.find_labels(metadata.links),
            tags=self.filter_tags(metadata.tags),
        )

    def filter_links(self, links: list[str]) -> list[str]:
        unique_links = list(dict.fromkeys(links))

        if self.filters.include_link_prefixes:
            unique_links = [
                link
                for link in unique_links
                if any(
                    link.startswith(prefix)
                    for prefix in self.filters.include_link_prefixes
                )
            ]

        return [
            link
            for link in unique_links
            if not any(
                link.endswith(f".{extension.lstrip('.')}")
                for extension in self.filters.exclude_link_extensions
            )
        ]

    def find_labels(self, links: list[str]) -> list[str]:
        prefixes = [prefix.lower() for prefix in self.filters.label_prefixes]
        return [
            link
            for link in links
            if any(link.lower().startswith(prefix) for prefix in prefixes)
        ]

    def filter_tags(self, tags: list[str]) -> list[str]:
        return [
            tag
            for tag in tags
            if not any(
                excluded in tag for excluded in self.filters.exclude_tags_containing
            )
        ]

    def hidden_links_html(self, link_data: LinkDataSet) -> str:
        """Hidden anchors to the published posts of linked notes.

        Notes without a published URL are skipped. Returns an empty string
        when no linked note has been published.
        """
        backlinks_html = self._anchors(link_data.backlinks, "backlink")
        outlinks_html = self._anchors(link_data.outlinks, "outlink")

        sections = []
        if backlinks_html or outlinks_html:
            sections.append(RELATED_LINKS_HEADING)
        if backlinks_html:
            sections.append(BACKLINKS_HEADING + backlinks_html)
        if outlinks_html:
            sections.append(OUTLINKS_HEADING + outlinks_html)
        return "".join(sections)

    def _anchors(self, links: list[str], kind: str) -> str:
        anchors = []
        for link in links:
            note = self.vault.find_file_by_name(f"{strip_note_suffix(link)}.md")
            if note is None:
                continue

            url = self.vault.get_metadata(note).frontmatter.get(self.url_key)
            if not url:
                continue

            anchors.append(f'<a href="{url}" class="{kind} hiddenlink">{note.stem}</a>')
        return "\n".join(anchors)
