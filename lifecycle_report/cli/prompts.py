"""Interactive prompts asking which platforms to report on."""

from typing import List, Optional

import questionary
from questionary import Choice, Style

from lifecycle_report._lifecycle.platforms import PLATFORMS

ALL_PLATFORMS = "all"


class PromptCancelled(Exception):
    """Raised when the user cancels a prompt (Ctrl-C or Escape)."""


# Minimal style, no highlighting or background colors
PROMPT_STYLE = Style(
    [
        ("qmark", "noreverse"),
        ("question", "noreverse"),
        ("answer", "noreverse"),
        ("pointer", "noreverse"),
        ("highlighted", "noreverse"),
        ("selected", "noreverse"),
        ("instruction", "fg:#888888 noreverse"),
        ("text", "noreverse"),
    ]
)


def platform_choices() -> List[Choice]:
    """Choices for the platform prompt, "All platforms" first."""
    choices = [Choice("All platforms", value=ALL_PLATFORMS)]
    choices.extend(Choice(platform.name, value=product) for product, platform in PLATFORMS.items())
    return choices


def ask_platform(default: Optional[str] = None) -> List[str]:
    """Ask which platform to report on.

    Returns:
        List of selected product identifiers (["all"] for every platform)

    Raises:
        PromptCancelled: If the prompt is cancelled
    """
    result = questionary.select(
        "Which platform should be reported?",
        choices=platform_choices(),
        default=default,
        instruction="(arrows to move, Enter to select)",
        style=PROMPT_STYLE,
    ).ask()

    if result is None:
        raise PromptCancelled()
    return [result]


def ask_only_eol(default: bool = False) -> bool:
    """Ask whether only end-of-life devices should be listed.

    Raises:
        PromptCancelled: If the prompt is cancelled
    """
    result = questionary.confirm(
        "Show only end-of-life devices?",
        default=default,
        style=PROMPT_STYLE,
    ).ask()

    if result is None:
        raise PromptCancelled()
    return result
