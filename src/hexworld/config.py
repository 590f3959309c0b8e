"""World generation profile and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

# Seed mask applied before seeding the random generator (numpy wants >= 0)
SEED_MASK_64 = 0xFFFF_FFFF_FFFF_FFFF

# Noise seeds are reduced to a non-negative 31-bit range
SEED_MASK_31 = 0x7FFF_FFFF

MIN_GRID_SIZE = 5
MAX_IRREGULARITY = 5


class WorldProfile(BaseModel, frozen=True):
    """Immutable parameters for one elevation map generation run."""

    width: int = Field(default=25, ge=MIN_GRID_SIZE, description="Grid width in hexes")
    height: int = Field(default=25, ge=MIN_GRID_SIZE, description="Grid height in hexes")
    seed: int = Field(
        default=12345,
        ge=-(2**63),
        lt=2**63,
        description="64-bit seed for reproducibility",
    )

    # Continents
    continents: int = Field(default=3, ge=0, description="Requested continent count")
    min_distance: int = Field(
        default=5, ge=0, description="Minimum distance between continent seeds"
    )
    max_distance: int = Field(
        default=20, ge=1, description="Maximum growth distance from a seed"
    )
    size_variance: int = Field(
        default=30, ge=0, le=100, description="Continent size variance (percent)"
    )
    irregularity: int = Field(
        default=3,
        ge=0,
        le=MAX_IRREGULARITY,
        description="Coastline and ridge noisiness (0-5)",
    )

    # Water
    water_percent: int = Field(default=40, ge=0, le=100, description="Water coverage")

    # Mountains
    mountain_percent: int = Field(
        default=20, ge=0, le=100, description="Ridge and peak coverage"
    )
    tall_mountains: int = Field(default=10, ge=0, description="Number of tall peaks")

    weighted_growth: bool = Field(
        default=False,
        description=(
            "Throttle continents that outgrow a share proportional to their "
            "size weight"
        ),
    )

    @model_validator(mode="after")
    def _check_consistency(self) -> "WorldProfile":
        if self.water_percent + self.mountain_percent > 100:
            raise ValueError("water_percent + mountain_percent cannot exceed 100")
        if self.max_distance <= self.min_distance:
            raise ValueError("max_distance must be greater than min_distance")
        return self

    @property
    def total_tiles(self) -> int:
        return self.width * self.height

    @property
    def land_percent(self) -> int:
        """Land coverage implied by water_percent, kept within [5, 95]."""
        return min(95, max(5, 100 - self.water_percent))

    @property
    def target_land_tiles(self) -> int:
        return round(self.total_tiles * (self.land_percent / 100.0))

    @property
    def mountain_target(self) -> int:
        """Number of tiles at ridge elevation or above that ridges grow toward."""
        return int(self.total_tiles * (self.mountain_percent / 100.0))

    @property
    def noise_seed(self) -> int:
        return self.seed & SEED_MASK_31

    @property
    def rng_seed(self) -> int:
        return self.seed & SEED_MASK_64

    def with_seed(self, seed: int) -> "WorldProfile":
        """Return a copy of this profile using a different seed."""
        return self.model_validate({**self.model_dump(), "seed": seed})


class ProfileFile(BaseModel):
    """Top-level layout of a profile TOML file."""

    world: WorldProfile = WorldProfile()


def load_profile(config_path: Path) -> WorldProfile:
    """Load a world profile from a TOML file.

    Args:
        config_path: Path to the TOML file.

    Returns:
        Parsed WorldProfile.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If the profile is inconsistent.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return ProfileFile.model_validate(data).world


def find_profile(name: str) -> Path:
    """Find a profile file by name.

    Searches in the following order:
    1. Exact path if name contains path separator
    2. configs/{name}.toml
    3. configs/{name}

    Args:
        name: Profile name or path.

    Returns:
        Path to the profile file.

    Raises:
        FileNotFoundError: If the profile is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Profile file not found: {name}")

    configs_dir = Path(__file__).parent.parent.parent / "configs"

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Profile '{name}' not found in {configs_dir}. "
        f"Available profiles: {list_profiles()}"
    )


def list_profiles() -> list[str]:
    """List available profile names."""
    configs_dir = Path(__file__).parent.parent.parent / "configs"
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))
