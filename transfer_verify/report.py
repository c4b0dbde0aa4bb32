"""Text rendering of per-pair results and the run summary."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from .format_utils import format_bytes, format_count
from .reconcile import ReconciliationResult

if TYPE_CHECKING:
    from .listing import Listing
    from .workflow import PairOutcome


def format_pair_header(source: str, target: str) -> str:
    """Header line printed before each pair is checked."""
    return f"> Checking {source} with {target}"


def format_failure(reason: str) -> str:
    """Line printed when a pair is aborted."""
    return f"  ✗ {reason}"


def _data_quality_lines(listing: Optional["Listing"], side: str) -> List[str]:
    if listing is None:
        return []
    lines = []
    if listing.duplicates:
        lines.append(f"  ! {side} listing repeated {format_count(len(listing.duplicates), 'path')}:")
        lines.extend(f"    duplicate: {path}" for path in listing.duplicates)
    if listing.unprefixed:
        lines.append(f"  ! {side} listing had {format_count(len(listing.unprefixed), 'key')} outside its prefix:")
        lines.extend(f"    unprefixed: {key}" for key in listing.unprefixed)
    return lines


def format_report(
    result: ReconciliationResult,
    source_listing: Optional["Listing"] = None,
    target_listing: Optional["Listing"] = None,
) -> List[str]:
    """
    Render a reconciliation result as report lines.

    Counts come first, then every discrepancy itemized in result order.
    """
    lines = [
        f"  ✓ {format_count(result.matched_count, 'file')} matched "
        f"({format_bytes(result.matched_bytes, binary_units=False)})"
    ]
    if result.mismatched:
        lines.append(f"  ✗ {format_count(len(result.mismatched), 'file')} with mismatched sizes")
    if result.missing:
        lines.append(f"  ✗ {format_count(len(result.missing), 'file')} missing in target")
    if result.extra:
        lines.append(f"  ✗ {format_count(len(result.extra), 'extra file')} in target")
    for mismatch in result.mismatched:
        lines.append(f"    incomplete: {mismatch.path}  {mismatch.source_size} => {mismatch.target_size}")
    for path in result.missing:
        lines.append(f"    missing: {path}")
    for path in result.extra:
        lines.append(f"    extra: {path}")
    lines.extend(_data_quality_lines(source_listing, "Source"))
    lines.extend(_data_quality_lines(target_listing, "Target"))
    return lines


def print_report(
    result: ReconciliationResult,
    source_listing: Optional["Listing"] = None,
    target_listing: Optional["Listing"] = None,
) -> None:
    """Print report lines for one pair."""
    for line in format_report(result, source_listing, target_listing):
        print(line)


def print_run_summary(outcomes: Sequence["PairOutcome"]) -> None:
    """Print totals across every pair processed."""
    verified = [o for o in outcomes if o.result is not None]
    clean = [o for o in verified if o.result.is_clean]
    failed = [o for o in outcomes if o.error is not None]
    print()
    print("=" * 70)
    print(
        f"Completed: {format_count(len(outcomes), 'pair')} checked, "
        f"{len(clean):,} clean, {len(verified) - len(clean):,} with discrepancies, "
        f"{len(failed):,} failed"
    )
    for outcome in failed:
        print(f"  ✗ {outcome.source} -> {outcome.target}: {outcome.error}")
    print("=" * 70)


__all__ = [
    "format_failure",
    "format_pair_header",
    "format_report",
    "print_report",
    "print_run_summary",
]
