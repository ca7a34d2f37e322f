"""Tests for device lifecycle classification."""

from datetime import timedelta

import pytest

from lifecycle_report._lifecycle.catalog import ReleaseCatalog, build_generic_catalog, build_windows_catalog
from lifecycle_report._lifecycle.classifier import NEARING_EOL_DAYS, classify, days_until, evaluate_entry
from lifecycle_report._lifecycle.models import NO_VALUE, CatalogEntry, Status, SupportPhase
from lifecycle_report._lifecycle.platforms import ANDROID, IOS, OTHER, WINDOWS
from lifecycle_report._lifecycle.versioning import parse_build_version

WINDOWS_HIGHEST = parse_build_version("10.0.26100")


class TestEvaluateEntry:
    @pytest.mark.parametrize(
        "days,status,phase",
        [
            (181, Status.SUPPORTED, SupportPhase.SUPPORTED),
            (180, Status.SUPPORTED, SupportPhase.SUPPORTED),
            (179, Status.SUPPORTED, SupportPhase.NEARING_EOL),
            (1, Status.SUPPORTED, SupportPhase.NEARING_EOL),
            (0, Status.END_OF_LIFE, SupportPhase.EOL),
            (-10, Status.END_OF_LIFE, SupportPhase.EOL),
        ],
    )
    def test_supported_entry_thresholds(self, today, days, status, phase):
        entry = CatalogEntry(supported=True, eol_date=today + timedelta(days=days))
        assert evaluate_entry(entry, today) == (status, phase, days)

    def test_nearing_window_is_180_days(self):
        assert NEARING_EOL_DAYS == 180

    def test_supported_entry_without_eol_date(self, today):
        entry = CatalogEntry(supported=True)
        assert evaluate_entry(entry, today) == (Status.SUPPORTED, SupportPhase.SUPPORTED, None)

    def test_unsupported_entry_reports_days_of_any_sign(self, today):
        past = CatalogEntry(supported=False, eol_date=today - timedelta(days=400))
        future = CatalogEntry(supported=False, eol_date=today + timedelta(days=20))

        assert evaluate_entry(past, today) == (Status.END_OF_LIFE, SupportPhase.EOL, -400)
        assert evaluate_entry(future, today) == (Status.END_OF_LIFE, SupportPhase.EOL, 20)

    def test_unsupported_entry_without_date(self, today):
        assert evaluate_entry(CatalogEntry(supported=False), today) == (Status.END_OF_LIFE, SupportPhase.EOL, None)

    def test_days_until(self, today):
        assert days_until(None, today) is None
        assert days_until(today, today) == 0
        assert days_until(today - timedelta(days=3), today) == -3


class TestGenericClassification:
    def test_supported_cycle_without_eol(self, make_device, make_record, today):
        catalog = build_generic_catalog([make_record("17")])
        result = classify(make_device(os_family="iOS", os_version="17.4.1"), IOS, catalog, today)

        assert result.status is Status.SUPPORTED
        assert result.phase is SupportPhase.SUPPORTED
        assert result.eol_date is None
        assert result.days_to_eol is None
        assert result.cycle == "17"

    def test_cycle_nearing_eol(self, make_device, make_record, today):
        catalog = build_generic_catalog([make_record("15", eol_in_days=30)])
        result = classify(make_device(os_version="15.2"), IOS, catalog, today)

        assert result.status is Status.SUPPORTED
        assert result.phase is SupportPhase.NEARING_EOL
        assert result.days_to_eol == 30
        assert result.eol_date == today + timedelta(days=30)

    def test_eol_cycle(self, make_device, make_record, today):
        catalog = build_generic_catalog([make_record("12", maintained=False, is_eol=True, eol_in_days=-200)])
        result = classify(make_device(os_family="Android", os_version="12"), ANDROID, catalog, today)

        assert result.status is Status.END_OF_LIFE
        assert result.phase is SupportPhase.EOL
        assert result.days_to_eol == -200

    def test_cycle_missing_from_catalog(self, make_device, make_record, today):
        catalog = build_generic_catalog([make_record("17"), make_record("18")])
        result = classify(make_device(os_version="19.0"), IOS, catalog, today)

        assert result.status is Status.UNKNOWN
        assert result.phase is SupportPhase.UNKNOWN
        assert result.eol_date is None
        assert result.days_to_eol is None
        assert result.lowest_supported == "17"
        assert result.newest_available == "18"

    def test_empty_catalog(self, make_device, today):
        result = classify(make_device(), IOS, ReleaseCatalog(), today)
        assert result.status is Status.UNKNOWN
        assert result.lowest_supported == NO_VALUE
        assert result.newest_available == NO_VALUE

    def test_device_fields_pass_through(self, make_device, make_record, today):
        device = make_device(name="ipad-7", model="iPad Pro", user="Sam Lee", os_version="17.1 (21B74)")
        result = classify(device, IOS, build_generic_catalog([make_record("17")]), today)

        assert result.os_family == "iOS"
        assert result.device_name == "ipad-7"
        assert result.model == "iPad Pro"
        assert result.user == "Sam Lee"
        assert result.os_version == "17.1 (21B74)"

    def test_idempotent(self, make_device, make_record, today):
        catalog = build_generic_catalog([make_record("17", eol_in_days=10)])
        device = make_device()
        assert classify(device, IOS, catalog, today) == classify(device, IOS, catalog, today)


class TestWindowsClassification:
    @pytest.fixture
    def catalog(self, make_record):
        return build_windows_catalog(
            [
                make_record("10.0.19045", maintained=False, is_eol=True, eol_in_days=-90, label="10 22H2 (W)"),
                make_record("10.0.22631", eol_in_days=100, label="11 23H2 (W)"),
                make_record("10.0.26100", eol_in_days=600, label="11 24H2 (W)"),
            ]
        )

    def test_known_build_uses_label(self, make_device, catalog, today):
        result = classify(make_device(os_family="Windows", os_version="10.0.26100.2605"), WINDOWS, catalog, today)

        assert result.status is Status.SUPPORTED
        assert result.phase is SupportPhase.SUPPORTED
        assert result.cycle == "11 24H2 (W)"
        assert result.days_to_eol == 600

    def test_known_build_with_leading_zeros(self, make_device, catalog, today):
        result = classify(make_device(os_family="Windows", os_version="10.0.026100.1"), WINDOWS, catalog, today)

        assert result.phase is SupportPhase.SUPPORTED
        assert result.cycle == "11 24H2 (W)"

    def test_known_build_nearing_eol(self, make_device, catalog, today):
        result = classify(make_device(os_family="Windows", os_version="10.0.22631.4460"), WINDOWS, catalog, today)
        assert result.phase is SupportPhase.NEARING_EOL
        assert result.days_to_eol == 100

    def test_eol_build(self, make_device, catalog, today):
        result = classify(make_device(os_family="Windows", os_version="10.0.19045.5247"), WINDOWS, catalog, today)
        assert result.status is Status.END_OF_LIFE
        assert result.phase is SupportPhase.EOL
        assert result.days_to_eol == -90

    def test_newer_build_is_preview(self, make_device, catalog, today):
        result = classify(make_device(os_family="Windows", os_version="10.0.27723.1000"), WINDOWS, catalog, today)

        assert result.status is Status.UNKNOWN
        assert result.phase is SupportPhase.PREVIEW
        assert result.cycle == "10.0.27723"

    def test_older_unlisted_build_is_unmapped(self, make_device, make_record, today):
        catalog = build_windows_catalog([make_record("10.0.26100", label="11 24H2 (W)")])
        result = classify(make_device(os_family="Windows", os_version="10.0.19045.1"), WINDOWS, catalog, today)

        assert result.status is Status.UNKNOWN
        assert result.phase is SupportPhase.UNMAPPED

    def test_build_equal_to_highest_but_absent_is_unmapped(self, make_device, today):
        catalog = ReleaseCatalog(highest_known_build=WINDOWS_HIGHEST)
        result = classify(make_device(os_family="Windows", os_version="10.0.26100.1"), WINDOWS, catalog, today)
        assert result.phase is SupportPhase.UNMAPPED

    def test_empty_catalog_is_unmapped(self, make_device, today):
        result = classify(make_device(os_family="Windows", os_version="10.0.30000.1"), WINDOWS, ReleaseCatalog(), today)
        assert result.phase is SupportPhase.UNMAPPED

    @pytest.mark.parametrize("version", ["garbage", "10.0", "Windows 11"])
    def test_unparseable_version_is_unmapped(self, make_device, catalog, today, version):
        result = classify(make_device(os_family="Windows", os_version=version), WINDOWS, catalog, today)

        assert result.status is Status.UNKNOWN
        assert result.phase is SupportPhase.UNMAPPED
        assert result.cycle is None


class TestOtherClassification:
    def test_always_unknown(self, make_device, make_record, today):
        catalog = build_generic_catalog([make_record("6")])
        result = classify(make_device(os_family="Linux", os_version="6.1.0"), OTHER, catalog, today)

        assert result.status is Status.UNKNOWN
        assert result.phase is SupportPhase.UNKNOWN
        assert result.os_family == "Linux"
        assert result.lowest_supported == NO_VALUE
        assert result.newest_available == NO_VALUE
        assert result.eol_date is None


def test_classify_defaults_to_current_date(make_device, make_record):
    catalog = build_generic_catalog([make_record("17")])
    result = classify(make_device(), IOS, catalog)
    assert result.status is Status.SUPPORTED
