"""Configuration management -- reads from environment with sensible defaults."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Centralised settings read once from env vars."""

    # --- Rendering ---------------------------------------------------------
    renderer: str = field(default_factory=lambda: os.getenv("RENDERER", "playwright"))
    browser_headless: bool = field(default_factory=lambda: _env_bool("BROWSER_HEADLESS", "true"))
    user_agent: str = field(default_factory=lambda: os.getenv("USER_AGENT", DEFAULT_USER_AGENT))
    navigation_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("NAVIGATION_TIMEOUT_MS", "30000"))
    )
    selector_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("SELECTOR_TIMEOUT_MS", "10000"))
    )
    settle_delay_ms: int = field(
        default_factory=lambda: int(os.getenv("SETTLE_DELAY_MS", "5000"))
    )

    # --- Extraction --------------------------------------------------------
    min_content_chars: int = field(
        default_factory=lambda: int(os.getenv("MIN_CONTENT_CHARS", "100"))
    )
    min_markdown_chars: int = field(
        default_factory=lambda: int(os.getenv("MIN_MARKDOWN_CHARS", "50"))
    )

    # --- Logging -----------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(
        default_factory=lambda: os.getenv("LOG_FILE", "logs/markdown_mcp.log")
    )
    analytics_file: str = field(
        default_factory=lambda: os.getenv("ANALYTICS_FILE", "logs/extractions.jsonl")
    )

    # --- Guardrails --------------------------------------------------------
    max_url_length: int = field(
        default_factory=lambda: int(os.getenv("MAX_URL_LENGTH", "2048"))
    )


# Module-level singleton -- import this everywhere.
settings = Settings()
