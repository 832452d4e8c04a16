from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parents[1] / ".env"
if _env_path.is_file():
    load_dotenv(_env_path, override=False)


@dataclass
class MolcoreSettings:
    """Configuration loaded from MOLCORE_* environment variables.

    Bond inference:
      MOLCORE_BOND_TOLERANCE=0.4
      MOLCORE_DEFAULT_BOND_DISTANCE=1.6

    Validation limits (applied by callers, never by the parsers):
      MOLCORE_MAX_ATOMS=10000
      MOLCORE_MAX_BONDS=15000
      MOLCORE_MAX_FILE_SIZE=52428800
      MOLCORE_MAX_NAME_LENGTH=256

    Logging:
      MOLCORE_LOG_LEVEL=INFO
    """

    bond_tolerance: float = 0.4
    default_bond_distance: float = 1.6

    max_atoms: int = 10_000
    max_bonds: int = 15_000
    max_file_size: int = 50 * 1024 * 1024
    max_name_length: int = 256

    log_level: str = "INFO"


def load_settings() -> MolcoreSettings:
    """Load settings from environment variables."""
    return MolcoreSettings(
        bond_tolerance=float(os.environ.get("MOLCORE_BOND_TOLERANCE", "0.4")),
        default_bond_distance=float(os.environ.get("MOLCORE_DEFAULT_BOND_DISTANCE", "1.6")),
        max_atoms=int(os.environ.get("MOLCORE_MAX_ATOMS", "10000")),
        max_bonds=int(os.environ.get("MOLCORE_MAX_BONDS", "15000")),
        max_file_size=int(os.environ.get("MOLCORE_MAX_FILE_SIZE", str(50 * 1024 * 1024))),
        max_name_length=int(os.environ.get("MOLCORE_MAX_NAME_LENGTH", "256")),
        log_level=os.environ.get("MOLCORE_LOG_LEVEL", "INFO").upper(),
    )
