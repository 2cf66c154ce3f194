"""Pydantic model for document version snapshots.

A :class:`DocumentVersion` is what the storage layer persists in a
transcript's version list.  Snapshots are immutable once created.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

VersionType = Literal["original", "processed"]


def _new_version_id() -> str:
    return uuid.uuid4().hex[:12]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentVersion(BaseModel):
    """An immutable snapshot of a transcript's text.

    Attributes:
        id: Short random identifier.
        timestamp: When the snapshot was taken (UTC).
        content: Full document text.
        type: ``"original"`` for the uploaded text, ``"processed"`` for
            the output of a processing run.
        changes: Description of what produced this version.
        score: Validation score of *content*, when computed.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_version_id)
    timestamp: datetime = Field(default_factory=_utc_now)
    content: str
    type: VersionType
    changes: str = ""
    score: int | None = Field(default=None, ge=0, le=100)
