"""End-to-end boot scenarios: descriptor, kernel banner and build properties
through the checker to the diagnostic screen.
"""

from __future__ import annotations

from pathlib import Path

from odmcheck.core.checker import OdmChecker
from odmcheck.core.kernel import read_kernel_version
from odmcheck.models.verdict import CheckOutcome, Verdict


class TestBootScenarios:
    def test_matching_partition_boots(
        self, make_settings, make_descriptor, store, presenter, surface
    ):
        make_descriptor(
            "ro.build.version = 9\n"
            "ro.vendor.version = R1\n"
            "ro.kernel.version = 4.9\n"
            "ro.platform.version = sdm660\n"
        )
        report = OdmChecker(make_settings(), store=store, presenter=presenter).run()

        assert report.outcome == CheckOutcome.MATCH
        assert report.exit_code == 0
        assert surface.calls == []

    def test_revision_mismatch_shows_diagnostic(
        self, make_settings, make_descriptor, store, presenter, surface
    ):
        make_descriptor(
            "ro.build.version = 9\n"
            "ro.vendor.version = R2\n"
            "ro.kernel.version = 4.9\n"
            "ro.platform.version = sdm660\n"
        )
        report = OdmChecker(make_settings(), store=store, presenter=presenter).run()

        assert report.outcome == CheckOutcome.MISMATCH
        assert report.exit_code != 0
        assert report.exit_code == report.difference
        assert report.verdict == Verdict.WARN
        assert "ODM rev: R2" in surface.texts[1]
        assert "ODM rev: R1" in surface.texts[3]

    def test_missing_kernel_tag(
        self, make_settings, make_descriptor, store, presenter, surface
    ):
        make_descriptor(
            "ro.build.version = 9\n"
            "ro.vendor.version = R1\n"
            "ro.platform.version = sdm660\n"
        )
        report = OdmChecker(make_settings(), store=store, presenter=presenter).run()

        assert report.outcome == CheckOutcome.MISSING_FIELDS
        assert report.exit_code == -2
        assert report.missing == ["kernel_version"]
        assert report.declared.kernel_version == ""
        assert surface.texts[1] == "Android: 9 Kernel:  Platform: sdm660 ODM rev: R1"

    def test_kernel_banner(self, tmp_path: Path):
        banner = tmp_path / "version"
        banner.write_text("Linux version 4.9.117-foo\n")
        assert read_kernel_version(banner) == "4.9"

    def test_empty_platform_property(
        self, make_settings, make_descriptor, store, presenter, surface
    ):
        make_descriptor()
        store.set("ro.board.platform", "")
        report = OdmChecker(make_settings(), store=store, presenter=presenter).run()

        assert report.outcome == CheckOutcome.READ_FAILURE
        assert report.exit_code == -1
        assert "ro.board.platform" in (report.error or "")
        assert report.actual.android_version == "9"
        assert report.actual.platform_version == ""
        assert surface.texts[3].startswith("Android: 9 Kernel: 4.9 Platform:  ODM rev: R1")
