"""Command-line interface for elevation map generation."""

import argparse
import logging
import secrets
import time

import structlog
from pydantic import ValidationError

from .config import WorldProfile, find_profile, load_profile

# Profile fields that can be overridden from the command line
OVERRIDES = {
    "width": "width",
    "height": "height",
    "continents": "continents",
    "min_distance": "min_distance",
    "max_distance": "max_distance",
    "size_variance": "size_variance",
    "irregularity": "irregularity",
    "water": "water_percent",
    "mountains": "mountain_percent",
    "tall_mountains": "tall_mountains",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a hex world elevation map"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of a profile TOML file (default: built-in defaults)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: profile seed, or a fresh one with --new-seed)",
    )
    parser.add_argument(
        "--new-seed",
        action="store_true",
        help="Ignore the profile seed and draw a fresh one",
    )
    parser.add_argument("--width", type=int, help="World width")
    parser.add_argument("--height", type=int, help="World height")
    parser.add_argument("--continents", type=int, help="Number of continents")
    parser.add_argument("--min-distance", type=int, help="Min seed distance")
    parser.add_argument("--max-distance", type=int, help="Max growth distance")
    parser.add_argument("--size-variance", type=int, help="Size variance percent")
    parser.add_argument("--irregularity", type=int, help="Irregularity level (0-5)")
    parser.add_argument("--water", type=int, help="Water percent")
    parser.add_argument("--mountains", type=int, help="Mountain percent")
    parser.add_argument("--tall-mountains", type=int, help="Tall mountain count")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def resolve_profile(args: argparse.Namespace) -> WorldProfile:
    """Build the profile from the config file and command-line overrides.

    Raises:
        FileNotFoundError: If the named profile does not exist.
        pydantic.ValidationError: If the resulting profile is invalid.
    """
    if args.config:
        profile = load_profile(find_profile(args.config))
    else:
        profile = WorldProfile()

    updates = {
        field: getattr(args, arg)
        for arg, field in OVERRIDES.items()
        if getattr(args, arg) is not None
    }
    if args.seed is not None:
        updates["seed"] = args.seed
    elif args.new_seed:
        updates["seed"] = secrets.randbits(63)

    if not updates:
        return profile
    return WorldProfile.model_validate({**profile.model_dump(), **updates})


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for elevation map generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    try:
        profile = resolve_profile(args)
    except FileNotFoundError as e:
        logger.error("profile_not_found", error=str(e))
        return 1
    except ValidationError as e:
        logger.error("invalid_profile", errors=e.errors(include_url=False))
        return 1

    # Import here to avoid slow startup for --help
    from .generator import elevation_stats, generate_elevation
    from .validation import validate_elevation

    print(
        f"Generating {profile.width}x{profile.height} world with seed {profile.seed}"
    )

    start_time = time.time()
    result = generate_elevation(profile)
    gen_time = time.time() - start_time

    print(f"Generation complete in {gen_time:.2f}s")
    print(f"Continents placed: {result.seeds_placed}/{result.seeds_requested}")
    print(f"Tall peaks placed: {result.peaks_placed}/{profile.tall_mountains}")

    total = result.elevation.size
    for name, count in elevation_stats(result.elevation).items():
        print(f"  {name:<11} {count:>7,} ({count / total:.1%})")

    for warning in result.warnings:
        print(f"warning: {warning}")
    for error in result.errors:
        print(f"error: {error}")

    validation = validate_elevation(result.elevation, profile)
    print(f"Validation: {'passed' if validation.passed else 'FAILED'}")
    for warning in validation.warnings:
        print(f"  warning: {warning}")
    for error in validation.errors:
        print(f"  error: {error}")

    return 0 if result.passed and validation.passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
