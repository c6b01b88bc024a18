import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()

# --- CONFIG ---
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"GEMINI_TIMEOUT must be a number of seconds, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Connection settings for the generative-text endpoint."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
            timeout=_parse_timeout(os.getenv("GEMINI_TIMEOUT")),
        )
