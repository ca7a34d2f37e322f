"""Command-line entry point for the device OS lifecycle report.

# Configuration
Every option can also be set through an environment variable:
- AZURE_TENANT_ID, AZURE_CLIENT_ID, AZURE_CLIENT_SECRET: Graph app credentials
- GRAPH_API_URL: Override the Microsoft Graph base URL
- ENDOFLIFE_API_URL: Override the endoflife.date base URL
- PLATFORM: Space-separated platforms (ios ipados macos android windows all)
- ONLY_EOL: List only end-of-life devices
- DEVICES_FILE: Read devices from a JSON export instead of Graph
- OUTPUT_FILE: Also write the report to a .json or .csv file
- LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
- LOG_FORMAT: "text" (default) or "json" for structured log lines
"""

import sys
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

import click

from .. import __version__
from .._lifecycle.catalog import ReleaseCatalog
from .._lifecycle.models import Device
from .._lifecycle.platforms import PLATFORMS, Platform, resolve_platform
from .._lifecycle.report import LifecycleReport, build_report
from .._sources.endoflife import ENDOFLIFE_BASE_URL, fetch_release_records
from .._sources.graph import GRAPH_BASE_URL, acquire_token, list_managed_devices
from .._sources.local import load_devices_file
from ..console import console, print_banner, print_final_failure, print_report, print_status_summary
from ..exceptions import APIError, ConfigurationError, LifecycleReportError
from ..export import SUPPORTED_SUFFIXES, write_report
from ..logging_config import logger, set_log_format, set_log_level
from .prompts import ALL_PLATFORMS, PromptCancelled, ask_only_eol, ask_platform

PLATFORM_CHOICES = list(PLATFORMS) + [ALL_PLATFORMS]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_FORMATS = ["text", "json"]


@dataclass
class Config:
    """Configuration settings for a report run."""

    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    platforms: List[str] = field(default_factory=lambda: [ALL_PLATFORMS])
    only_eol: bool = False
    devices_file: Optional[str] = None
    output_file: Optional[str] = None
    as_of: date = field(default_factory=date.today)
    graph_url: str = GRAPH_BASE_URL
    endoflife_url: str = ENDOFLIFE_BASE_URL

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.devices_file:
            missing = [
                name
                for name, value in (
                    ("AZURE_TENANT_ID", self.tenant_id),
                    ("AZURE_CLIENT_ID", self.client_id),
                    ("AZURE_CLIENT_SECRET", self.client_secret),
                )
                if not value
            ]
            if missing:
                raise ConfigurationError(
                    f"Graph credentials are not defined: {', '.join(missing)}. "
                    "Provide them or use --devices-file."
                )

        if not self.platforms:
            raise ConfigurationError("At least one platform must be selected")
        unknown = [p for p in self.platforms if p not in PLATFORM_CHOICES]
        if unknown:
            raise ConfigurationError(f"Unknown platform(s): {', '.join(unknown)}")

        if self.output_file and not self.output_file.lower().endswith(SUPPORTED_SUFFIXES):
            raise ConfigurationError("Output file must end in .json or .csv")

        self.graph_url = self._validate_url(self.graph_url, "Graph API URL")
        self.endoflife_url = self._validate_url(self.endoflife_url, "endoflife.date URL")

    @staticmethod
    def _validate_url(url: str, label: str) -> str:
        """
        Validate a base URL and strip any trailing slash.

        Raises:
            ConfigurationError: If URL format is invalid
        """
        from urllib.parse import urlparse

        parsed = urlparse(url)
        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError(f"{label} must start with http:// or https://")
        if not parsed.netloc:
            raise ConfigurationError(f"{label} must include a valid hostname")
        return url.rstrip("/")

    @property
    def selected_platforms(self) -> List[Platform]:
        """Platforms with lifecycle data covered by this run."""
        if ALL_PLATFORMS in self.platforms:
            return list(PLATFORMS.values())
        return [PLATFORMS[p] for p in self.platforms]

    @property
    def includes_other(self) -> bool:
        """Whether devices of untracked families stay in the report."""
        return ALL_PLATFORMS in self.platforms


def load_devices(config: Config) -> List[Device]:
    """Load devices from the configured file or from Graph."""
    if config.devices_file:
        return load_devices_file(config.devices_file)

    token = acquire_token(config.tenant_id, config.client_id, config.client_secret)
    return list_managed_devices(token, graph_base_url=config.graph_url)


def filter_devices(devices: List[Device], config: Config) -> List[Device]:
    """Keep devices whose family was selected."""
    if config.includes_other:
        return list(devices)
    selected = {platform.name for platform in config.selected_platforms}
    return [device for device in devices if resolve_platform(device.os_family).name in selected]


def load_catalogs(devices: List[Device], config: Config) -> Dict[str, ReleaseCatalog]:
    """
    Build a catalog for each selected platform that has devices.

    A failed fetch leaves that platform with an empty catalog, so its
    devices are reported as unknown instead of aborting the run.
    """
    present = {resolve_platform(device.os_family).name for device in devices}
    catalogs: Dict[str, ReleaseCatalog] = {}

    for platform in config.selected_platforms:
        if platform.name not in present:
            continue
        try:
            records = fetch_release_records(platform.product, base_url=config.endoflife_url)
        except APIError as e:
            logger.warning(f"No lifecycle data for {platform.name}: {e}")
            records = []
        catalogs[platform.name] = platform.build_catalog(records)

    return catalogs


def run_report(config: Config) -> LifecycleReport:
    """
    Run the whole report: fetch, classify, print and optionally export.

    Args:
        config: Validated configuration

    Returns:
        The LifecycleReport that was printed

    Raises:
        LifecycleReportError: If devices cannot be loaded or the export fails
    """
    devices = filter_devices(load_devices(config), config)
    catalogs = load_catalogs(devices, config)
    report = build_report(devices, catalogs, only_eol=config.only_eol, today=config.as_of)

    print_status_summary(report.status_counts, skipped=report.skipped_devices)
    print_report(report.results, only_eol=config.only_eol)

    if config.output_file:
        write_report(config.output_file, report.results, report.status_counts, config.as_of)
        console.print(f"[success]Report written to {config.output_file}[/success]")

    return report


def _should_prompt(interactive: Optional[bool], platforms: tuple) -> bool:
    if interactive is not None:
        return interactive
    return not platforms and sys.stdin.isatty()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="lifecycle-report", message="%(prog)s %(version)s")
@click.option("--tenant-id", envvar="AZURE_TENANT_ID", help="Azure AD tenant ID.")
@click.option("--client-id", envvar="AZURE_CLIENT_ID", help="App registration client ID.")
@click.option("--client-secret", envvar="AZURE_CLIENT_SECRET", help="App registration client secret.")
@click.option(
    "--platform",
    "platforms",
    multiple=True,
    envvar="PLATFORM",
    type=click.Choice(PLATFORM_CHOICES, case_sensitive=False),
    help="Platform to report on; repeat for several. Defaults to all.",
)
@click.option(
    "--only-eol/--all-devices",
    default=None,
    envvar="ONLY_EOL",
    help="List only end-of-life devices.",
)
@click.option(
    "--interactive/--no-interactive",
    default=None,
    help="Prompt for platform and EOL filter. Defaults to on for a terminal without --platform.",
)
@click.option(
    "--devices-file",
    envvar="DEVICES_FILE",
    type=click.Path(dir_okay=False),
    help="Read devices from a JSON export instead of Microsoft Graph.",
)
@click.option(
    "--output-file",
    envvar="OUTPUT_FILE",
    type=click.Path(dir_okay=False, writable=True),
    help="Also write the report to a .json or .csv file.",
)
@click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Compute days to EOL relative to this date (YYYY-MM-DD). Defaults to today.",
)
@click.option("--graph-url", envvar="GRAPH_API_URL", default=GRAPH_BASE_URL, show_default=True)
@click.option("--endoflife-url", envvar="ENDOFLIFE_API_URL", default=ENDOFLIFE_BASE_URL, show_default=True)
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    default="INFO",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    show_default=True,
)
@click.option(
    "--log-format",
    envvar="LOG_FORMAT",
    default="text",
    type=click.Choice(LOG_FORMATS, case_sensitive=False),
    show_default=True,
    help="Emit log lines as plain text or JSON.",
)
def cli(
    tenant_id,
    client_id,
    client_secret,
    platforms,
    only_eol,
    interactive,
    devices_file,
    output_file,
    as_of,
    graph_url,
    endoflife_url,
    log_level,
    log_format,
):
    """Report managed devices by OS support status using endoflife.date lifecycle data."""
    set_log_level(log_level)
    set_log_format(log_format)
    print_banner(__version__)

    selected = [p.lower() for p in platforms]
    try:
        if _should_prompt(interactive, platforms):
            if not selected:
                selected = ask_platform()
            if only_eol is None:
                only_eol = ask_only_eol()
    except PromptCancelled:
        raise click.Abort()

    config = Config(
        tenant_id=tenant_id,
        client_id=client_id,
        client_secret=client_secret,
        platforms=selected or [ALL_PLATFORMS],
        only_eol=bool(only_eol),
        devices_file=devices_file,
        output_file=output_file,
        as_of=as_of.date() if as_of else date.today(),
        graph_url=graph_url,
        endoflife_url=endoflife_url,
    )

    try:
        config.validate()
        run_report(config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print_final_failure(str(e))
        sys.exit(1)
    except LifecycleReportError as e:
        logger.error(f"Report failed: {e}")
        print_final_failure(str(e))
        sys.exit(1)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
