"""Filesystem-backed corpus writer.

CorpusWriter owns the on-disk layout: one markdown file per page plus one
summary file per category, all flat in `output_dir`. Other modules should use
this API instead of building paths manually.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from .constants import (
    DEFAULT_EXCLUDED_CATEGORIES,
    DEFAULT_FILE_EXTENSION,
    DEFAULT_SUMMARY_PREFIX,
)
from .types import Document, JSONDict, PageIdentifier, category_for


LOGGER = logging.getLogger(__name__)

SUMMARY_SEPARATOR = "\n\n"


class CorpusWriter:
    """Persist page documents and build category summaries under `output_dir`."""

    def __init__(
        self,
        output_dir: str | Path,
        *,
        excluded_categories: Iterable[str] = DEFAULT_EXCLUDED_CATEGORIES,
        file_extension: str = DEFAULT_FILE_EXTENSION,
        summary_prefix: str = DEFAULT_SUMMARY_PREFIX,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.excluded_categories = frozenset(excluded_categories)
        self.file_extension = file_extension
        self.summary_prefix = summary_prefix

        self._categories: dict[str, list[Document]] = {}

        self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def paths(self) -> JSONDict:
        """Return important output paths for logging/CLI status messages."""

        return {
            "output_dir": str(self.output_dir),
            "log_dir": str(self.output_dir / "logs"),
        }

    @staticmethod
    def _flat_stem(name: str) -> str:
        return name.replace(":", "_").replace("/", "_")

    def file_name_for(self, identifier: PageIdentifier) -> str:
        """Build the flat file name for one page identifier."""

        return f"{self._flat_stem(identifier)}{self.file_extension}"

    def path_for(self, identifier: PageIdentifier) -> Path:
        return self.output_dir / self.file_name_for(identifier)

    def summary_path_for(self, category: str) -> Path:
        # Categories without a namespace can still contain "/".
        stem = self._flat_stem(category)
        return self.output_dir / f"{self.summary_prefix}{stem}{self.file_extension}"

    def save_document(self, identifier: PageIdentifier, document: Document) -> Path:
        """Add document to its category and write its content as-is."""

        category = category_for(identifier)
        self._categories.setdefault(category, []).append(document)

        path = self.path_for(identifier)
        self._atomic_write_text(path, document.content)
        LOGGER.debug("Wrote %s (category=%s)", path, category)
        return path

    def categories(self) -> dict[str, list[Document]]:
        """Return snapshot of documents grouped by category, in insertion order."""

        return {category: list(documents) for category, documents in self._categories.items()}

    def build_summary(self, category: str) -> str:
        """Concatenate a category's document contents separated by one blank line."""

        documents = self._categories.get(category, [])
        return SUMMARY_SEPARATOR.join(document.content for document in documents)

    def write_summaries(self) -> list[Path]:
        """Write one summary file per category, skipping excluded categories."""

        written: list[Path] = []
        for category in self._categories:
            if category in self.excluded_categories:
                LOGGER.debug("Skipping summary for excluded category %s", category)
                continue

            path = self.summary_path_for(category)
            self._atomic_write_text(path, self.build_summary(category))
            written.append(path)

        LOGGER.info("Wrote %d category summaries", len(written))
        return written

    @staticmethod
    def _atomic_write_text(path: Path, content: str) -> None:
        tmp_fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=path.name + ".",
            suffix=".tmp",
        )
        try:
            # newline="" keeps content byte-for-byte, no platform newline translation.
            with os.fdopen(tmp_fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise


__all__ = ["CorpusWriter", "SUMMARY_SEPARATOR"]
