"""Custom exceptions for elevation map generation."""


class HexWorldError(Exception):
    """Base exception for hexworld errors."""

    pass


class ConfigurationError(HexWorldError, ValueError):
    """Raised when a profile or grid is inconsistent before generation starts."""

    pass


class NoContinentSeedsError(HexWorldError):
    """Raised when continent growth has no seeds to grow from."""

    pass
