"""Runtime settings, with LINEAGE_* environment overrides."""

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True)
class Settings:
    dataset_path: Path = PROJECT_ROOT / "data" / "family.json"
    output_dir: Path = PROJECT_ROOT / "output"
    members_per_page: int = 80  # two columns of 40 on an A4 page
    memorial_start_year: int = 2024
    reference_prefix: str = "NPB"
    qr_size: int = 150


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from defaults, a .env file, and the process environment."""
    load_dotenv(env_file)
    defaults = Settings()

    dataset = os.getenv("LINEAGE_DATASET")
    output_dir = os.getenv("LINEAGE_OUTPUT_DIR")

    return Settings(
        dataset_path=Path(dataset) if dataset else defaults.dataset_path,
        output_dir=Path(output_dir) if output_dir else defaults.output_dir,
        members_per_page=_int_env("LINEAGE_MEMBERS_PER_PAGE", defaults.members_per_page),
        memorial_start_year=_int_env("LINEAGE_MEMORIAL_START_YEAR", defaults.memorial_start_year),
        reference_prefix=os.getenv("LINEAGE_REFERENCE_PREFIX") or defaults.reference_prefix,
        qr_size=_int_env("LINEAGE_QR_SIZE", defaults.qr_size),
    )
