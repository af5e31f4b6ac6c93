"""
Exceptions raised by frontier ranking.
"""
from typing import Iterable


class FrontierExplorationError(Exception):
    """Base class for frontier ranking errors."""


class ConfigurationError(FrontierExplorationError):
    """Missing or invalid configuration."""


class UnknownStrategyError(ConfigurationError):
    """No frontier value is registered under the requested name."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = tuple(sorted(available))
        super().__init__(
            f"Unknown frontier value '{name}' "
            f"(available: {', '.join(self.available) or 'none'})"
        )


class EmptyCollectionError(FrontierExplorationError, LookupError):
    """Selection requested on a map with no stored frontiers."""

    def __init__(self, message: str = "no frontiers available"):
        super().__init__(message)
