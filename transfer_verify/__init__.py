"""Verify Seven Bridges project exports against S3 buckets."""

from __future__ import annotations

from . import cli, credentials, enrichment, listing, paths, reconcile, report, workflow

__all__ = [
    "cli",
    "credentials",
    "enrichment",
    "listing",
    "paths",
    "reconcile",
    "report",
    "workflow",
]
