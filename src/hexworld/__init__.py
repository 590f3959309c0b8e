"""Deterministic elevation maps for hex-tiled worlds.

Continents grow from scattered seeds over a coherent noise field, the
coastline is smoothed, and mountain ranges are walked out from tall peaks.
"""

from .config import WorldProfile, find_profile, list_profiles, load_profile
from .continents import ContinentSeed, grow_continents, place_seeds
from .coastal import smooth_coastlines
from .exceptions import ConfigurationError, HexWorldError, NoContinentSeedsError
from .generator import GenerationResult, elevation_stats, generate_elevation
from .hexgrid import HexDirection, neighbors
from .mountains import generate_mountains
from .noise import CoastNoise
from .validation import ValidationResult, validate_elevation

__all__ = [
    # Config
    "WorldProfile",
    "find_profile",
    "list_profiles",
    "load_profile",
    # Generation
    "GenerationResult",
    "generate_elevation",
    "elevation_stats",
    # Phases
    "ContinentSeed",
    "place_seeds",
    "grow_continents",
    "smooth_coastlines",
    "generate_mountains",
    "CoastNoise",
    # Geometry
    "HexDirection",
    "neighbors",
    # Validation
    "ValidationResult",
    "validate_elevation",
    # Exceptions
    "HexWorldError",
    "ConfigurationError",
    "NoContinentSeedsError",
]
