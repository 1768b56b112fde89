"""Tests for the version comparator."""

from __future__ import annotations

import pytest

from odmcheck.core.comparator import compare_versions
from odmcheck.models.versions import FIELD_ORDER, VersionRecord


class TestCompareVersions:
    def test_equal_records(self, matching_record):
        result = compare_versions(matching_record, matching_record.model_copy())
        assert result.equal
        assert result.difference == 0

    @pytest.mark.parametrize("field", FIELD_ORDER)
    def test_any_single_field_differs(self, matching_record, field: str):
        other = matching_record.model_copy(update={field: "other"})
        result = compare_versions(matching_record, other)
        assert not result.equal
        assert result.difference != 0

    def test_prefix_value_differs(self, matching_record):
        other = matching_record.model_copy(update={"kernel_version": "4.90"})
        assert not compare_versions(matching_record, other).equal

    def test_case_is_significant(self, matching_record):
        other = matching_record.model_copy(update={"platform_version": "SDM660"})
        assert not compare_versions(matching_record, other).equal

    def test_no_whitespace_normalization(self, matching_record):
        other = matching_record.model_copy(update={"odm_revision": "R1 "})
        assert not compare_versions(matching_record, other).equal

    def test_difference_fits_exit_status(self):
        left = VersionRecord(odm_revision="R2")
        right = VersionRecord(odm_revision="R1")
        difference = compare_versions(left, right).difference
        assert difference != 0
        assert difference % 256 != 0

    def test_values_longer_than_width(self):
        long_value = "v" * 200
        left = VersionRecord(platform_version=long_value)
        right = VersionRecord(platform_version=long_value + "x")
        assert compare_versions(left, left, field_width=92).equal
        assert not compare_versions(left, right, field_width=92).equal
