#!/usr/bin/env python3
"""Verify that Seven Bridges project files were exported to AWS buckets.

Thin script wrapper around the transfer_verify package:
  - transfer_verify.listing: bucket and project-tree listing collection
  - transfer_verify.reconcile: path/size reconciliation
  - transfer_verify.report: report rendering
  - transfer_verify.cli: command-line interface and main entry point
"""

from __future__ import annotations

from transfer_verify.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
