"""Structured changelog data model.

A changelog is an ordered list of releases (a *release set*). Each
release holds change entries in authoring order; renderers regroup
them by category when presenting.

Field declaration order is the key order of the JSON wire format.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from shiplog.core.taxonomy import ChangeCategory


def new_id() -> str:
    """Generate an id that is unique for the lifetime of the process."""
    return uuid.uuid4().hex


def today() -> str:
    """Current UTC calendar date as YYYY-MM-DD."""
    return datetime.now(UTC).strftime("%Y-%m-%d")


class ChangeEntry(BaseModel):
    """A single described change.

    The ``id`` only exists so an entry can be addressed for edit or
    delete without relying on its position. On the wire ``category``
    is written as ``type``.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(default_factory=new_id)
    category: ChangeCategory = Field(alias="type")
    description: str = ""


class Release(BaseModel):
    """One version of the project with its changes."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    version: str
    date: str = Field(default_factory=today)
    changes: list[ChangeEntry] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.changes


ReleaseSet = list[Release]


def prepare_for_export(releases: ReleaseSet) -> ReleaseSet:
    """Drop blank entries and the releases left empty by doing so.

    Renderers and the differ expect callers to do this beforehand;
    they do not re-validate their input.

    Args:
        releases: Releases as authored

    Returns:
        New release set; the input is not modified
    """
    prepared: ReleaseSet = []
    for release in releases:
        changes = [
            change.model_copy() for change in release.changes if change.description.strip()
        ]
        if changes:
            prepared.append(release.model_copy(update={"changes": changes}))
    return prepared


def copy_releases(releases: ReleaseSet, *, fresh_ids: bool = False) -> ReleaseSet:
    """Deep copy a release set, optionally giving every entry a new id."""
    copied = [release.model_copy(deep=True) for release in releases]
    if fresh_ids:
        for release in copied:
            for change in release.changes:
                change.id = new_id()
    return copied
