"""CLI module for lifecycle-report.

Provides the command-line interface. Options fall back to environment
variables, and the platform and EOL filter can be chosen interactively.
"""

from .main import (
    Config,
    cli,
    filter_devices,
    load_catalogs,
    load_devices,
    main,
    run_report,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "filter_devices",
    "load_catalogs",
    "load_devices",
    "run_report",
]
