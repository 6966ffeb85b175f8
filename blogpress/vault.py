"""Read-only access to a directory of notes and attachments."""

from pathlib import Path
from typing import Any

import yaml
from frontmatter import loads as fm_loads
from pydantic import BaseModel

from blogpress.logger import get_logger
from blogpress.markdown import find_inline_tags, find_wiki_link_targets

logger = get_logger(__name__)

NOTE_SUFFIXES = {".md", ".markdown"}


class NoteMetadata(BaseModel):
    """What the vault knows about a single note without rendering it."""

    frontmatter: dict[str, Any] = {}
    tags: list[str] = []
    """Tags with a leading `#`, frontmatter tags first, then inline tags"""

    links: list[str] = []
    """Wiki-link targets in the body, in order of appearance"""

    frontmatter_links: list[str] = []
    """Wiki-link targets found inside frontmatter values"""


class Vault:
    """
    A directory of notes. Lookups are by file name only, as wiki links carry
    no folder. When two folders hold the same file name the one whose relative
    path sorts first wins, so lookups are deterministic.

    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self._files: list[Path] | None = None
        self._name_index: dict[str, Path] = {}
        self._metadata_cache: dict[Path, NoteMetadata] = {}

    def files(self) -> list[Path]:
        """All files below the root, sorted by relative POSIX path."""
        if self._files is None:
            self._build_index()
        return list(self._files or [])

    def notes(self) -> list[Path]:
        return [path for path in self.files() if path.suffix.lower() in NOTE_SUFFIXES]

    def _build_index(self) -> None:
        files = []
        if self.root.exists():
            for path in self.root.rglob("*"):
                relative = path.relative_to(self.root)
                if any(part.startswith(".") for part in relative.parts):
                    continue
                if path.is_file():
                    files.append(path)

        files.sort(key=lambda path: path.relative_to(self.root).as_posix())
        self._files = files

        self._name_index = {}
        for path in files:
            if path.name in self._name_index:
                logger.debug(
                    f"Duplicate file name {path.name}: keeping "
                    f"{self._name_index[path.name]}, ignoring {path}"
                )
                continue
            self._name_index[path.name] = path

        logger.debug(f"Indexed {len(files)} files under {self.root}")

    def refresh(self) -> None:
        """Forget the file listing and metadata, e.g. after writing a file."""
        self._files = None
        self._metadata_cache.clear()

    def find_file_by_name(self, name: str) -> Path | None:
        if self._files is None:
            self._build_index()
        return self._name_index.get(name)

    def relative_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.name

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def get_metadata(self, path: Path) -> NoteMetadata:
        if path not in self._metadata_cache:
            self._metadata_cache[path] = self._read_metadata(path)
        return self._metadata_cache[path]

    def _read_metadata(self, path: Path) -> NoteMetadata:
        text = self.read_text(path)

        try:
            post = fm_loads(text)
            frontmatter, body = dict(post.metadata), post.content
        except (yaml.YAMLError, ValueError) as e:
            logger.warning(f"Ignoring invalid frontmatter in {path}: {e}")
            frontmatter, body = {}, text

        tags = [f"#{tag.lstrip('#')}" for tag in _as_list(frontmatter.get("tags"))]
        tags.extend(find_inline_tags(body))

        frontmatter_links = []
        for value in frontmatter.values():
            for item in _as_list(value):
                frontmatter_links.extend(find_wiki_link_targets(item))

        return NoteMetadata(
            frontmatter=frontmatter,
            tags=tags,
            links=find_wiki_link_targets(body),
            frontmatter_links=frontmatter_links,
        )

    def get_backlinks(self, path: Path) -> list[str]:
        """Relative paths of the other notes that link to this note."""
        backlinks = []
        for note in self.notes():
            if note == path:
                continue
            metadata = self.get_metadata(note)
            targets = {
                strip_note_suffix(target)
                for target in [*metadata.links, *metadata.frontmatter_links]
            }
            if path.stem in targets:
                backlinks.append(self.relative_path(note))
        return sorted(backlinks)


def strip_note_suffix(target: str) -> str:
    """`folder/Note.md` and `Note` both name the note `Note`."""
    name = target.rsplit("/", 1)[-1]
    for suffix in NOTE_SUFFIXES:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return name


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return [str(value)]
