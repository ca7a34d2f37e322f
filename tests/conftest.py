"""Pytest configuration and shared fixtures for all tests."""

from datetime import date, timedelta

import pytest

from lifecycle_report._lifecycle.models import Device, ReleaseRecord

TODAY = date(2025, 1, 15)


@pytest.fixture
def today():
    """Fixed reference date so day counts do not depend on the wall clock."""
    return TODAY


@pytest.fixture
def make_device():
    """Factory for devices with sensible defaults."""

    def _make(os_family="iOS", os_version="17.4.1", name="device-1", model="iPhone 15", user="Alex Doe"):
        return Device(
            id=f"id-{name}",
            name=name,
            model=model,
            os_family=os_family,
            os_version=os_version,
            user=user,
        )

    return _make


@pytest.fixture
def make_record():
    """Factory for release records; eol_in_days is relative to TODAY."""

    def _make(cycle, maintained=True, is_eol=False, eol_in_days=None, label=None, released=None):
        return ReleaseRecord(
            cycle=cycle,
            eol_date=TODAY + timedelta(days=eol_in_days) if eol_in_days is not None else None,
            is_eol=is_eol,
            is_maintained=maintained,
            label=label,
            release_date=date.fromisoformat(released) if released else None,
        )

    return _make
