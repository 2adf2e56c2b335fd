# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Decision policy for running code that shadows built-in names."""

import logging
from enum import Enum
from typing import Protocol

from spice_lang.shadowing import Override

logger = logging.getLogger(__name__)


class PromptChoice(Enum):
    """Answer offered to the user by the override warning."""

    CONTINUE = "Continue Anyway"
    CANCEL = "Cancel"
    DONT_SHOW_AGAIN = "Don't Show This Again"


class GateOutcome(Enum):
    """Result of gating an action behind the override warning."""

    PROCEED = "proceed"
    PROCEED_AND_SUPPRESS = "proceed_and_suppress"
    ABORT = "abort"

    @property
    def proceeds(self) -> bool:
        return self is not GateOutcome.ABORT


class OverridePrompt(Protocol):
    """Ask the user how to handle detected overrides."""

    def __call__(self, overrides: list[Override], message: str) -> PromptChoice | None:
        """Present the warning and return the chosen answer.

        Args:
            overrides: Detected overrides, never empty.
            message: Rendered warning text.

        Returns:
            Selected choice, or ``None`` when the prompt was dismissed.
        """


def format_override_warning(overrides: list[Override]) -> str:
    """Render the warning shown before compiling or running.

    Args:
        overrides: Detected overrides.

    Returns:
        Multi-line warning text.
    """
    listing = "\n".join(
        f"  • {override.name} (line {override.line_number}) - {override.kind.label}"
        for override in overrides
    )
    plural = "s" if len(overrides) > 1 else ""
    return (
        "Built-in Function Overrides Detected\n\n"
        "The following built-in functions are being overridden in your code:\n\n"
        f"{listing}\n\n"
        "Overriding built-in functions can lead to unexpected behavior and may break "
        "standard functionality.\n\n"
        f"Found {len(overrides)} built-in override{plural} in your code. "
        "Would you like to continue anyway?"
    )


def gate_overrides(
    overrides: list[Override], check_enabled: bool, prompt: OverridePrompt
) -> GateOutcome:
    """Decide whether an action may proceed given detected overrides.

    The prompt is only consulted when the check is enabled and at least one
    override was found.

    Args:
        overrides: Detected overrides for the document.
        check_enabled: Whether the override check is active.
        prompt: Capability presenting the warning to the user.

    Returns:
        Gate outcome.
    """
    if not check_enabled or not overrides:
        return GateOutcome.PROCEED

    choice = prompt(overrides, format_override_warning(overrides))
    if choice is PromptChoice.CONTINUE:
        return GateOutcome.PROCEED
    if choice is PromptChoice.DONT_SHOW_AGAIN:
        return GateOutcome.PROCEED_AND_SUPPRESS
    logger.info(f"Action cancelled at override warning (overrides={len(overrides)})")
    return GateOutcome.ABORT
