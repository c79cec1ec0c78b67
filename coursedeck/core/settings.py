from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "courses"
DEFAULT_CARD_WIDTH = 300
DEFAULT_CARD_SPACING = 40


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from ``COURSEDECK_*`` environment variables."""

    data_dir: Path = DEFAULT_DATA_DIR
    unlock_all: bool = False
    card_width: int = DEFAULT_CARD_WIDTH
    card_spacing: int = DEFAULT_CARD_SPACING
    log_level: str = "INFO"

    @property
    def pitch(self) -> int:
        """Distance between the centers of two neighbouring level cards."""
        return self.card_width + self.card_spacing

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        data_dir = env.get("COURSEDECK_DATA_DIR", "").strip()
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            unlock_all=env.get("COURSEDECK_UNLOCK_ALL") == "1",
            card_width=_non_negative_int(env, "COURSEDECK_CARD_WIDTH", DEFAULT_CARD_WIDTH),
            card_spacing=_non_negative_int(env, "COURSEDECK_CARD_SPACING", DEFAULT_CARD_SPACING),
            log_level=(env.get("COURSEDECK_LOG_LEVEL") or "INFO").strip().upper(),
        )


def _non_negative_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: must not be negative, using %d", name, raw, default)
        return default
    return value
