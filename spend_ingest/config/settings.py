"""Runtime settings read from the environment (optionally a local .env)."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY_RATE = 95.0


def load_dotenv_if_present(dotenv_path: str = ".env") -> None:
    """Copy KEY=VALUE lines from a .env file into os.environ.

    Variables already set in the environment are never overwritten.
    """
    path = Path(dotenv_path)
    if not path.is_file():
        return
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value
    logger.debug(f"Loaded environment defaults from {path}")


class Settings(BaseModel):
    """Ingestion settings.

    ``currency_rate`` converts the ad platform's SGD spend into the BDT
    ledger currency; it is a fixed multiplier, no rate lookup happens.
    """

    currency_rate: float = Field(default=DEFAULT_CURRENCY_RATE, gt=0)
    supabase_url: str = ""
    supabase_key: str = ""
    sink_timeout_seconds: float = Field(default=30.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: if a numeric variable is malformed or out of range.
        """
        env = os.environ if environ is None else environ
        values = {
            "supabase_url": env.get("SUPABASE_URL") or env.get("NEXT_PUBLIC_SUPABASE_URL", ""),
            "supabase_key": env.get("SUPABASE_SERVICE_ROLE_KEY", ""),
            "log_level": env.get("LOG_LEVEL", "INFO"),
        }
        if env.get("FX_SGD_TO_BDT"):
            values["currency_rate"] = env["FX_SGD_TO_BDT"]
        if env.get("SINK_TIMEOUT_SECONDS"):
            values["sink_timeout_seconds"] = env["SINK_TIMEOUT_SECONDS"]
        try:
            return cls(**values)
        except ValidationError as e:
            raise ValueError(f"Invalid settings: {e}") from e
