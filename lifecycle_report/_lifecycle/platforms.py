"""OS family variants and how each one is looked up and classified."""

from datetime import date
from typing import Dict, Iterable, Optional, Protocol, Tuple

from .catalog import ReleaseCatalog, build_generic_catalog, build_windows_catalog
from .classifier import build_result, classify_matched
from .models import ClassificationResult, Device, ReleaseRecord, Status, SupportPhase
from .versioning import extract_major_cycle, extract_windows_build, parse_build_version


class Platform(Protocol):
    """
    Protocol shared by every OS family variant.

    Example:
        platform = resolve_platform("iOS")
        catalog = platform.build_catalog(records)
        result = platform.classify(device, catalog, date.today())
    """

    @property
    def name(self) -> str:
        """Display name of the family (e.g. "iOS", "Windows")."""
        ...

    @property
    def product(self) -> Optional[str]:
        """endoflife.date product identifier, None when not tracked."""
        ...

    def matches(self, os_name: str) -> bool:
        """Check whether a device's reported OS name belongs to this family."""
        ...

    def extract_key(self, version: Optional[str]) -> Optional[str]:
        """Derive the catalog lookup key from a raw version string."""
        ...

    def build_catalog(self, records: Iterable[ReleaseRecord]) -> ReleaseCatalog:
        """Index this family's release records."""
        ...

    def classify(self, device: Device, catalog: ReleaseCatalog, today: date) -> ClassificationResult:
        """Classify one device of this family."""
        ...


def _normalize(os_name: Optional[str]) -> str:
    return (os_name or "").strip().lower()


class GenericPlatform:
    """Family whose lifecycle cycles are plain major versions (iOS, macOS, Android)."""

    def __init__(self, name: str, product: str, prefixes: Tuple[str, ...]) -> None:
        self._name = name
        self._product = product
        self._prefixes = prefixes

    @property
    def name(self) -> str:
        return self._name

    @property
    def product(self) -> Optional[str]:
        return self._product

    def matches(self, os_name: str) -> bool:
        normalized = _normalize(os_name)
        return any(normalized.startswith(prefix) for prefix in self._prefixes)

    def extract_key(self, version: Optional[str]) -> Optional[str]:
        return extract_major_cycle(version)

    def build_catalog(self, records: Iterable[ReleaseRecord]) -> ReleaseCatalog:
        return build_generic_catalog(records)

    def classify(self, device: Device, catalog: ReleaseCatalog, today: date) -> ClassificationResult:
        key = self.extract_key(device.os_version)
        entry = catalog.get(key)
        if key is None or entry is None:
            return build_result(device, self.name, key, Status.UNKNOWN, SupportPhase.UNKNOWN, catalog=catalog)
        return classify_matched(device, self.name, key, entry, catalog, today)

    def __repr__(self) -> str:
        return f"GenericPlatform({self._name!r})"


class WindowsPlatform:
    """Windows, keyed by major.minor.build rather than by cycle number."""

    @property
    def name(self) -> str:
        return "Windows"

    @property
    def product(self) -> Optional[str]:
        return "windows"

    def matches(self, os_name: str) -> bool:
        return _normalize(os_name).startswith("windows")

    def extract_key(self, version: Optional[str]) -> Optional[str]:
        return extract_windows_build(version)

    def build_catalog(self, records: Iterable[ReleaseRecord]) -> ReleaseCatalog:
        return build_windows_catalog(records)

    def classify(self, device: Device, catalog: ReleaseCatalog, today: date) -> ClassificationResult:
        build = self.extract_key(device.os_version)
        if build is None:
            return build_result(device, self.name, None, Status.UNKNOWN, SupportPhase.UNMAPPED, catalog=catalog)

        entry = catalog.get(build)
        if entry is not None:
            return classify_matched(device, self.name, entry.label or build, entry, catalog, today)

        # Builds newer than anything published are insider/preview builds
        version = parse_build_version(build)
        highest = catalog.highest_known_build
        if version is not None and highest is not None and version > highest:
            phase = SupportPhase.PREVIEW
        else:
            phase = SupportPhase.UNMAPPED
        return build_result(device, self.name, build, Status.UNKNOWN, phase, catalog=catalog)

    def __repr__(self) -> str:
        return "WindowsPlatform()"


class OtherPlatform:
    """Any family without lifecycle data; always classified as unknown."""

    @property
    def name(self) -> str:
        return "Other"

    @property
    def product(self) -> Optional[str]:
        return None

    def matches(self, os_name: str) -> bool:
        return True

    def extract_key(self, version: Optional[str]) -> Optional[str]:
        return extract_major_cycle(version)

    def build_catalog(self, records: Iterable[ReleaseRecord]) -> ReleaseCatalog:
        return ReleaseCatalog()

    def classify(self, device: Device, catalog: ReleaseCatalog, today: date) -> ClassificationResult:
        return build_result(
            device,
            device.os_family or self.name,
            self.extract_key(device.os_version),
            Status.UNKNOWN,
            SupportPhase.UNKNOWN,
        )

    def __repr__(self) -> str:
        return "OtherPlatform()"


IOS = GenericPlatform("iOS", "ios", ("ios",))
IPADOS = GenericPlatform("iPadOS", "ipados", ("ipados",))
MACOS = GenericPlatform("macOS", "macos", ("macos", "mac os", "os x"))
ANDROID = GenericPlatform("Android", "android", ("android",))
WINDOWS = WindowsPlatform()
OTHER = OtherPlatform()

# Platforms with lifecycle data, keyed by endoflife.date product
PLATFORMS: Dict[str, Platform] = {
    "ios": IOS,
    "ipados": IPADOS,
    "macos": MACOS,
    "android": ANDROID,
    "windows": WINDOWS,
}


def resolve_platform(os_name: Optional[str]) -> Platform:
    """
    Find the platform for a device's reported OS name.

    Args:
        os_name: Free-form OS name (e.g. "iOS", "Windows 11", "AndroidForWork")

    Returns:
        Matching platform, or OTHER when no tracked family matches
    """
    for platform in PLATFORMS.values():
        if platform.matches(os_name or ""):
            return platform
    return OTHER
