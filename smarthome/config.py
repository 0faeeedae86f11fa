from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv(
        "SMARTHOME_SESSION_SECRET", "smarthome-secret-change-in-production",
    )
    seed_demo_data: bool = _env_flag("SMARTHOME_SEED_DEMO", "1")
    seed_path: Path = Path(__file__).resolve().parent / "storage" / "data" / "listings.csv"
    bcrypt_rounds: int = int(os.getenv("SMARTHOME_BCRYPT_ROUNDS", "12"))


DEFAULT_APP_CONFIG = AppConfig()
