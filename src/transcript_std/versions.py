"""Append-only version ledger and before/after comparison.

The storage layer owns a transcript's versions; this module gives it a
small helper for recording snapshots in order and for comparing an
original against its processed counterpart.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rapidfuzz import fuzz

from transcript_std.models.version import DocumentVersion, VersionType

logger = logging.getLogger(__name__)


class VersionLedger:
    """Ordered, append-only sequence of :class:`DocumentVersion` snapshots.

    Args:
        versions: Existing snapshots, oldest first (e.g. loaded from
            storage).
    """

    def __init__(self, versions: Iterable[DocumentVersion] = ()) -> None:
        self._versions: list[DocumentVersion] = list(versions)

    def __iter__(self) -> Iterator[DocumentVersion]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    @property
    def versions(self) -> tuple[DocumentVersion, ...]:
        return tuple(self._versions)

    def append(self, version: DocumentVersion) -> DocumentVersion:
        """Add *version* to the end of the ledger and return it."""
        self._versions.append(version)
        logger.debug("Recorded %s version %s", version.type, version.id)
        return version

    def record_original(self, content: str, score: int | None = None) -> DocumentVersion:
        """Record the uploaded text."""
        return self.append(
            DocumentVersion(content=content, type="original", changes="Initial upload", score=score)
        )

    def record_processed(
        self, content: str, score: int | None, corrections: int
    ) -> DocumentVersion:
        """Record the output of a processing run."""
        return self.append(
            DocumentVersion(
                content=content,
                type="processed",
                changes=f"Processing applied - {corrections} corrections made",
                score=score,
            )
        )

    def latest(self, version_type: VersionType | None = None) -> DocumentVersion | None:
        """Most recent version, optionally of a given type."""
        for version in reversed(self._versions):
            if version_type is None or version.type == version_type:
                return version
        return None


@dataclass(frozen=True)
class VersionComparison:
    """Before/after statistics for two versions.

    Attributes:
        original_words: Whitespace-separated word count of the original.
        processed_words: Word count of the processed version.
        original_lines: Line count of the original.
        processed_lines: Line count of the processed version.
        similarity: Character-level similarity, 0-100.
        score_delta: Processed score minus original score, or ``None``
            when either version is unscored.
    """

    original_words: int
    processed_words: int
    original_lines: int
    processed_lines: int
    similarity: float
    score_delta: int | None

    @property
    def word_delta(self) -> int:
        return self.processed_words - self.original_words

    @property
    def line_delta(self) -> int:
        return self.processed_lines - self.original_lines


def _word_count(text: str) -> int:
    return len(text.split())


def compare_versions(original: DocumentVersion, processed: DocumentVersion) -> VersionComparison:
    """Compute before/after statistics for two snapshots."""
    score_delta = None
    if original.score is not None and processed.score is not None:
        score_delta = processed.score - original.score

    return VersionComparison(
        original_words=_word_count(original.content),
        processed_words=_word_count(processed.content),
        original_lines=len(original.content.split("\n")),
        processed_lines=len(processed.content.split("\n")),
        similarity=round(fuzz.ratio(original.content, processed.content), 1),
        score_delta=score_delta,
    )
