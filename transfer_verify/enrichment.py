"""Bulk size lookup for source-side file handles."""

from __future__ import annotations

import logging
from typing import Sequence

from .sbg_client import SbgDivision, SbgFile


class BulkMetadataEnricher:  # pylint: disable=too-few-public-methods
    """Fills in missing file sizes with one bulk details operation."""

    def __init__(self, division: SbgDivision):
        self.division = division

    def enrich(self, files: Sequence[SbgFile]) -> bool:
        """
        Populate `size` on every leaf file that lacks it.

        Returns:
            True when all sizes are known afterwards; False if the lookup failed.
            Nothing is requested when every file already has a size.
        """
        missing = [f for f in files if not f.is_folder and f.size is None]
        if not missing:
            return True
        logging.info("Requesting bulk details for %s SB files", f"{len(missing):,}")
        return self.division.bulk_get_file_details(missing)


__all__ = ["BulkMetadataEnricher"]
