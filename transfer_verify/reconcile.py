"""Source/target reconciliation by canonical path and exact byte size."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, NamedTuple


class SizeMismatch(NamedTuple):
    """A path present on both sides with differing sizes."""

    path: str
    source_size: int
    target_size: int


@dataclass
class ReconciliationResult:
    """Partition of source and target paths into four disjoint outcomes."""

    matched_count: int = 0
    matched_bytes: int = 0
    mismatched: List[SizeMismatch] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    extra: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """Return True when every source file matched and nothing is extra."""
        return not (self.mismatched or self.missing or self.extra)

    @property
    def discrepancy_count(self) -> int:
        """Total entries across the mismatched, missing and extra outcomes."""
        return len(self.mismatched) + len(self.missing) + len(self.extra)


def reconcile(source: Mapping[str, int], target: Mapping[str, int]) -> ReconciliationResult:
    """
    Compare two canonical listings.

    Source paths keep their iteration order in matched/mismatched/missing;
    target paths never seen in the source are returned sorted as extra.
    Neither input is modified.
    """
    result = ReconciliationResult()
    remaining = dict(target)
    for path, source_size in source.items():
        if path not in remaining:
            result.missing.append(path)
            continue
        target_size = remaining.pop(path)
        if source_size == target_size:
            result.matched_count += 1
            result.matched_bytes += source_size
        else:
            result.mismatched.append(SizeMismatch(path, source_size, target_size))
    result.extra = sorted(remaining)
    return result


__all__ = ["ReconciliationResult", "SizeMismatch", "reconcile"]
