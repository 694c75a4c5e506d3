"""Configuration error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """An environment value is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are unset or blank.

    ``names`` lists them sorted, so a single run reports everything it is missing.
    """

    def __init__(self, names: Iterable[str], *, needed_for: str | None = None) -> None:
        self.names = tuple(sorted(names))
        message = f"Missing configuration for: {', '.join(self.names)}"
        if needed_for:
            message = f"{message} (needed for {needed_for})"
        super().__init__(message)
