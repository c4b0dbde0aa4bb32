"""Per-pair verification workflow: resolve, collect, reconcile, report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .credentials import load_sbg_credentials
from .errors import PairVerificationError, ProjectNotFoundError
from .listing import BucketListingSource, Listing, ProjectTreeListingSource, collect_listing
from .reconcile import ReconciliationResult, reconcile
from .report import format_failure, format_pair_header, print_report
from .s3_client import create_s3_client, resolve_bucket
from .sbg_client import SbgDivision
from .settings import Settings

_S3_SCHEME = "s3://"


@dataclass(frozen=True)
class PairSpec:
    """One source project path and the bucket path it was exported to."""

    source: str
    target: str


@dataclass
class PairOutcome:
    """What happened to one pair: a result, or the reason it was aborted."""

    source: str
    target: str
    result: Optional[ReconciliationResult] = None
    error: Optional[str] = None
    source_listing: Optional[Listing] = None
    target_listing: Optional[Listing] = None

    @property
    def succeeded(self) -> bool:
        """Return True when both listings were collected and reconciled."""
        return self.result is not None


def _split_first(value: str) -> Tuple[str, Optional[str]]:
    head, _, tail = value.strip("/").partition("/")
    return head, (tail.strip("/") or None)


def parse_target_spec(target: str) -> Tuple[str, Optional[str]]:
    """Split `bucket[/prefix]` (an `s3://` scheme is accepted) into its parts."""
    if target.startswith(_S3_SCHEME):
        target = target[len(_S3_SCHEME) :]
    return _split_first(target)


def parse_source_spec(source: str) -> Tuple[str, Optional[str]]:
    """Split `project[/folder/path]` into the project name and folder path."""
    return _split_first(source)


class TransferVerifier:
    """Checks each source project/folder against its target bucket/prefix."""

    def __init__(self, s3, division: SbgDivision):
        self.s3 = s3
        self.division = division

    def verify_pair(self, source: str, target: str) -> PairOutcome:
        """
        Collect both listings and reconcile them.

        Raises:
            PairVerificationError: If either side cannot be resolved or collected
        """
        bucket, prefix = parse_target_spec(target)
        project_name, folder = parse_source_spec(source)

        resolve_bucket(self.s3, bucket)
        project = self.division.get_project(project_name)
        if project is None:
            raise ProjectNotFoundError(project_name)

        target_listing = collect_listing(BucketListingSource(self.s3, bucket, prefix))
        source_listing = collect_listing(ProjectTreeListingSource(self.division, project, folder))

        result = reconcile(source_listing.entries, target_listing.entries)
        return PairOutcome(
            source=source,
            target=target,
            result=result,
            source_listing=source_listing,
            target_listing=target_listing,
        )

    def run(self, pairs: Sequence[PairSpec]) -> List[PairOutcome]:
        """Verify pairs in order; a failed pair is reported and skipped."""
        outcomes: List[PairOutcome] = []
        for pair in pairs:
            print()
            print(format_pair_header(pair.source, pair.target))
            try:
                outcome = self.verify_pair(pair.source, pair.target)
            except PairVerificationError as exc:
                logging.debug("Pair %s -> %s aborted", pair.source, pair.target, exc_info=True)
                outcomes.append(_failed_outcome(pair, str(exc)))
                continue
            except (RuntimeError, ValueError, LookupError, TypeError, AttributeError, OSError) as exc:
                logging.exception("Unexpected error verifying %s -> %s", pair.source, pair.target)
                outcomes.append(_failed_outcome(pair, f"Unexpected error: {exc!r}"))
                continue
            print_report(outcome.result, outcome.source_listing, outcome.target_listing)
            outcomes.append(outcome)
        return outcomes


def _failed_outcome(pair: PairSpec, reason: str) -> PairOutcome:
    print(format_failure(reason))
    return PairOutcome(source=pair.source, target=pair.target, error=reason)


def build_verifier(settings: Settings) -> TransferVerifier:
    """
    Load credentials and open both store clients.

    Raises:
        ConfigurationError: If the AWS profile or the SB division cannot be loaded
    """
    s3 = create_s3_client(settings.profile, settings.aws_credentials_path, settings.region)
    sbg_credentials = load_sbg_credentials(settings.sbg_credentials_path, settings.division)
    division = SbgDivision(
        settings.division,
        sbg_credentials,
        api_url=settings.sbg_api_url,
        timeout=settings.request_timeout,
        bulk_batch_size=settings.bulk_batch_size,
    )
    return TransferVerifier(s3, division)


__all__ = [
    "PairOutcome",
    "PairSpec",
    "TransferVerifier",
    "build_verifier",
    "parse_source_spec",
    "parse_target_spec",
]
