"""Unit tests for project-tree listing collection in transfer_verify.listing"""

from unittest import mock

import pytest

from transfer_verify.enrichment import BulkMetadataEnricher
from transfer_verify.errors import EmptyListingError, EnrichmentError, FolderNotFoundError
from transfer_verify.listing import BucketListingSource, ListingKind, ProjectTreeListingSource, collect_listing
from transfer_verify.reconcile import reconcile
from tests.store_test_utils import FakeDivision, make_s3_client, s3_page


@pytest.fixture(name="division")
def fixture_division():
    """Division holding one project with a nested folder"""
    return FakeDivision(
        {
            "12345r": {
                "a/b.txt": 10,
                "a/deeper/c.txt": 20,
                "top.txt": 5,
                "empty-folder": None,
            }
        }
    )


def test_whole_project_listing(division):
    """Test a project listing keeps root-relative paths and skips folders"""
    project = division.get_project("12345r")

    listing = collect_listing(ProjectTreeListingSource(division, project))

    assert listing.kind is ListingKind.PROJECT_TREE
    assert listing.entries == {"a/b.txt": 10, "a/deeper/c.txt": 20, "top.txt": 5}
    assert listing.label == "div/12345r"


def test_folder_listing_strips_folder_path(division):
    """Test a folder listing is relative to the folder"""
    project = division.get_project("12345r")

    listing = collect_listing(ProjectTreeListingSource(division, project, "a"))

    assert listing.entries == {"b.txt": 10, "deeper/c.txt": 20}
    assert listing.unprefixed == []


def test_folder_and_prefix_canonicalize_to_same_path():
    """Test source folder 'a' and target prefix 'proj123/' both yield 'b.txt'"""
    division = FakeDivision({"proj": {"a/b.txt": 10}})
    project = division.get_project("proj")
    s3 = make_s3_client(s3_page({"proj123/b.txt": 10}))

    source = collect_listing(ProjectTreeListingSource(division, project, "a"))
    target = collect_listing(BucketListingSource(s3, "bucket", "proj123/"))
    result = reconcile(source.entries, target.entries)

    assert source.entries == {"b.txt": 10}
    assert target.entries == {"b.txt": 10}
    assert result.matched_count == 1


def test_missing_folder_fails(division):
    """Test an unresolvable folder raises FolderNotFoundError"""
    project = division.get_project("12345r")

    with pytest.raises(FolderNotFoundError, match="nope"):
        collect_listing(ProjectTreeListingSource(division, project, "nope"))


def test_folder_path_naming_a_file_fails(division):
    """Test a folder argument that resolves to a file is rejected"""
    project = division.get_project("12345r")

    with pytest.raises(FolderNotFoundError):
        collect_listing(ProjectTreeListingSource(division, project, "top.txt"))


def test_empty_folder_is_fatal(division):
    """Test a folder without files raises EmptyListingError"""
    project = division.get_project("12345r")

    with pytest.raises(EmptyListingError):
        collect_listing(ProjectTreeListingSource(division, project, "empty-folder"))


def test_enrichment_failure_aborts(division):
    """Test a failed bulk lookup raises EnrichmentError"""
    division.bulk_ok = False
    project = division.get_project("12345r")

    with pytest.raises(EnrichmentError, match="3 SB file objects"):
        collect_listing(ProjectTreeListingSource(division, project))


def test_enricher_receives_listed_files(division):
    """Test the collector hands the recursive listing to its enricher"""
    project = division.get_project("12345r")
    enricher = mock.Mock(spec=BulkMetadataEnricher)
    enricher.enrich.return_value = True

    with pytest.raises(EnrichmentError):
        collect_listing(ProjectTreeListingSource(division, project, "a", enricher))

    listed = enricher.enrich.call_args.args[0]
    assert sorted(f.path for f in listed) == ["a/b.txt", "a/deeper", "a/deeper/c.txt"]


def test_unsized_files_after_enrichment_abort(division):
    """Test that a successful lookup leaving sizes unset still aborts"""
    project = division.get_project("12345r")
    enricher = mock.Mock(spec=BulkMetadataEnricher)
    enricher.enrich.return_value = True

    with pytest.raises(EnrichmentError, match="2 SB file objects"):
        collect_listing(ProjectTreeListingSource(division, project, "a", enricher))


def test_case_variants_remain_distinct():
    """Test paths differing only by case are separate entries"""
    division = FakeDivision({"p": {"File.txt": 5, "file.txt": 5}})
    project = division.get_project("p")

    listing = collect_listing(ProjectTreeListingSource(division, project))
    result = reconcile(listing.entries, {"file.txt": 5})

    assert set(listing.entries) == {"File.txt", "file.txt"}
    assert result.matched_count == 1
    assert result.missing == ["File.txt"]
