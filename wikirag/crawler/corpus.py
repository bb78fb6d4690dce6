"""Read a crawled corpus directory the way the downstream indexer does."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterator

from .constants import DEFAULT_FILE_EXTENSION, SKIPPED_CORPUS_PREFIXES
from .types import JSONDict


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CorpusEntry:
    """One indexable page: file stem as id, first line as title."""

    id: str
    title: str
    content: str

    def to_json(self) -> JSONDict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
        }


def _title_for_index(content: str) -> str:
    # Every '#' on the first line goes, not just leading markers.
    return content.split("\n", maxsplit=1)[0].replace("#", "").strip()


def iter_corpus_entries(
    output_dir: str | Path,
    *,
    file_extension: str = DEFAULT_FILE_EXTENSION,
    skipped_prefixes: tuple[str, ...] = SKIPPED_CORPUS_PREFIXES,
) -> Iterator[CorpusEntry]:
    """Yield page entries sorted by file name, skipping summary/archive files."""

    root = Path(output_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Corpus directory does not exist: {root}")

    for path in sorted(root.glob(f"*{file_extension}")):
        if not path.is_file():
            continue
        if path.stem.startswith(skipped_prefixes):
            LOGGER.debug("Skipping %s", path.name)
            continue

        content = path.read_text(encoding="utf-8")
        yield CorpusEntry(id=path.stem, title=_title_for_index(content), content=content)


def load_corpus_entries(output_dir: str | Path, **kwargs) -> list[CorpusEntry]:
    """Load all corpus entries into a list."""

    return list(iter_corpus_entries(output_dir, **kwargs))


__all__ = [
    "CorpusEntry",
    "iter_corpus_entries",
    "load_corpus_entries",
]
