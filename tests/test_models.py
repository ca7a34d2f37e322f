"""Tests for lifecycle data models."""

from datetime import date

import pytest

from lifecycle_report._lifecycle.models import (
    ClassificationResult,
    Device,
    ReleaseRecord,
    Status,
    SupportPhase,
    parse_date,
)


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2025-09-15") == date(2025, 9, 15)

    def test_datetime_string_is_truncated(self):
        assert parse_date("2025-09-15T00:00:00Z") == date(2025, 9, 15)

    @pytest.mark.parametrize("value", [None, "", "soon", "2025-13-01", True, False, 20250915])
    def test_unparseable_is_none(self, value):
        assert parse_date(value) is None


class TestDevice:
    def test_from_api(self):
        device = Device.from_api(
            {
                "id": "abc",
                "deviceName": "LAPTOP-01",
                "model": "Surface Laptop 5",
                "operatingSystem": "Windows",
                "osVersion": "10.0.22631.4460",
                "userDisplayName": "Jordan Smith",
            }
        )
        assert device.name == "LAPTOP-01"
        assert device.os_family == "Windows"
        assert device.os_version == "10.0.22631.4460"
        assert device.has_version is True

    def test_missing_fields_become_empty(self):
        device = Device.from_api({"id": "x", "osVersion": None})
        assert device.os_version == ""
        assert device.user == ""
        assert device.has_version is False


class TestReleaseRecord:
    @pytest.mark.parametrize(
        "is_eol,maintained,expected",
        [(False, True, True), (True, True, False), (False, False, False), (True, False, False)],
    )
    def test_supported(self, is_eol, maintained, expected):
        assert ReleaseRecord(cycle="17", is_eol=is_eol, is_maintained=maintained).supported is expected

    def test_display_name(self):
        assert ReleaseRecord(cycle="10.0.26100", label="11 24H2 (W)").display_name == "11 24H2 (W)"
        assert ReleaseRecord(cycle="17").display_name == "17"


class TestStatus:
    def test_rank(self):
        assert Status.END_OF_LIFE.rank < Status.UNKNOWN.rank < Status.SUPPORTED.rank

    def test_phase_values(self):
        assert SupportPhase.PREVIEW.value == "Preview/Beta"
        assert SupportPhase.NEARING_EOL.value == "NearingEOL"


def test_classification_result_to_dict():
    result = ClassificationResult(
        os_family="iOS",
        model="iPhone 13",
        device_name="phone",
        user="Pat",
        os_version="15.2",
        cycle="15",
        status=Status.SUPPORTED,
        phase=SupportPhase.NEARING_EOL,
        eol_date=date(2025, 2, 14),
        days_to_eol=30,
        lowest_supported="15",
        newest_available="18",
    )
    data = result.to_dict()
    assert data["status"] == "Supported"
    assert data["phase"] == "NearingEOL"
    assert data["eol_date"] == "2025-02-14"
    assert data["days_to_eol"] == 30
