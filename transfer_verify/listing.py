"""
Listing collection for both sides of a transfer.

A bucket and a project tree are two variants of the same thing: a source of
raw (key, size) entries plus the prefix that must be stripped to reach the
canonical path. `collect_listing` turns either into a Listing.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from .enrichment import BulkMetadataEnricher
from .errors import (
    EmptyListingError,
    EnrichmentError,
    FolderNotFoundError,
    ListingStreamError,
)
from .paths import join_prefix, matches_prefix, normalize_key
from .sbg_client import SbgDivision, SbgProject

ListingMap = Dict[str, int]


class ListingKind(enum.Enum):
    """Which kind of store produced a listing."""

    BUCKET = "bucket"
    PROJECT_TREE = "project_tree"


@dataclass(frozen=True)
class RawEntry:
    """One entry as reported by a store, before normalization."""

    key: str
    size: int
    is_folder: bool = False


@dataclass(frozen=True)
class ObjectEntry:
    """One file after normalization."""

    canonical_path: str
    size: int


@dataclass
class Listing:
    """Canonical path to size mapping plus data-quality notes from collection."""

    kind: ListingKind
    label: str
    entries: ListingMap = field(default_factory=dict)
    duplicates: List[str] = field(default_factory=list)
    unprefixed: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def add(self, entry: ObjectEntry) -> None:
        """Record an entry; a repeated path keeps the last size seen."""
        if entry.canonical_path in self.entries:
            self.duplicates.append(entry.canonical_path)
            logging.warning(
                "%s reported %s twice (sizes %s then %s); keeping the last",
                self.label,
                entry.canonical_path,
                self.entries[entry.canonical_path],
                entry.size,
            )
        self.entries[entry.canonical_path] = entry.size


class ListingSource(Protocol):
    """Anything `collect_listing` can drain."""

    kind: ListingKind
    label: str
    strip_prefix: Optional[str]

    def fetch(self) -> Iterator[RawEntry]:
        """Yield every raw entry in the store scope."""


class BucketListingSource:
    """Paginated `list_objects_v2` enumeration of a bucket, optionally under a prefix."""

    kind = ListingKind.BUCKET

    def __init__(self, s3, bucket: str, prefix: Optional[str] = None):
        self.s3 = s3
        self.bucket = bucket
        self.strip_prefix = join_prefix(prefix) or None
        self.label = f"s3://{bucket}/{self.strip_prefix or ''}"

    def _page_contents(self, page: dict) -> List[dict]:
        contents = page.get("Contents")
        key_count = page.get("KeyCount")
        if contents is None:
            if key_count not in (None, 0):
                raise ListingStreamError(self.label, f"page reported {key_count} keys without Contents")
            return []
        return contents

    def fetch(self) -> Iterator[RawEntry]:
        paginate_kwargs = {"Bucket": self.bucket}
        if self.strip_prefix:
            paginate_kwargs["Prefix"] = self.strip_prefix
        paginator = self.s3.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(**paginate_kwargs):
                for obj in self._page_contents(page):
                    key = obj["Key"]
                    yield RawEntry(key=key, size=int(obj["Size"]), is_folder=key.endswith("/"))
        except (ClientError, BotoCoreError) as exc:
            raise ListingStreamError(self.label, str(exc)) from exc


class ProjectTreeListingSource:
    """Recursive listing of a project, or of one folder inside it."""

    kind = ListingKind.PROJECT_TREE

    def __init__(
        self,
        division: SbgDivision,
        project: SbgProject,
        folder: Optional[str] = None,
        enricher: Optional[BulkMetadataEnricher] = None,
    ):
        self.division = division
        self.project = project
        self.folder = folder.strip("/") if folder else None
        self.enricher = enricher or BulkMetadataEnricher(division)
        self.strip_prefix: Optional[str] = None
        self.label = f"{project.id}/{self.folder}" if self.folder else project.id

    def fetch(self) -> Iterator[RawEntry]:
        folder_handle = None
        if self.folder:
            folder_handle = self.division.get_file_by_name(self.project, self.folder)
            if folder_handle is None or not folder_handle.is_folder:
                raise FolderNotFoundError(self.folder)
            self.strip_prefix = folder_handle.path
        files = self.division.recursive_list(self.project, folder_handle)
        leaves = [f for f in files if not f.is_folder]
        if not self.enricher.enrich(files) or any(f.size is None for f in leaves):
            raise EnrichmentError(len(leaves))
        for sb_file in files:
            yield RawEntry(key=sb_file.path, size=sb_file.size or 0, is_folder=sb_file.is_folder)


def collect_listing(source: ListingSource) -> Listing:
    """
    Drain a listing source into a canonical Listing.

    Raises:
        EmptyListingError: If no files were collected
        ResolutionError / CollectionError: Propagated from the source
    """
    logging.info("Collecting %s listing for %s", source.kind.value, source.label)
    listing = Listing(kind=source.kind, label=source.label)
    for raw in source.fetch():
        if raw.is_folder:
            continue
        canonical = normalize_key(raw.key, source.strip_prefix)
        if canonical is None:
            continue
        if not matches_prefix(raw.key, source.strip_prefix):
            listing.unprefixed.append(raw.key)
        listing.add(ObjectEntry(canonical, raw.size))
    if not listing.entries:
        raise EmptyListingError(source.label)
    logging.info("Collected %s files from %s", f"{len(listing):,}", source.label)
    return listing


__all__ = [
    "BucketListingSource",
    "Listing",
    "ListingKind",
    "ListingMap",
    "ListingSource",
    "ObjectEntry",
    "ProjectTreeListingSource",
    "RawEntry",
    "collect_listing",
]
