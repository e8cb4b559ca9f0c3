"""Configuration management via environment variables.

Reads from .env file (via pydantic-settings) with sensible defaults.
All values can be overridden via environment variables.

Optional:
    ANTHROPIC_API_KEY  — For Claude-powered narrative explanations
    RATE_HISTORY_PATH  — JSON file with the policy-rate history (refi/deposit/lending)
    RATE_CUTOFF        — Month prefix (YYYY-MM) from which rate history is hidden
    PORT               — HTTP API port
    LOG_LEVEL          — Log level passed to uvicorn
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Claude API for narrative explanations (optional)
    anthropic_api_key: str = ""
    narrative_model: str = "claude-sonnet-4-20250514"
    narrative_max_tokens: int = 1200

    # Policy-rate history (optional; rate tools report an error without it)
    rate_history_path: str = ""
    rate_cutoff: str = "2025-07"

    # HTTP API
    port: int = 8877
    log_level: str = "INFO"

    # Strip whitespace and stray quotes from .env values
    @field_validator("anthropic_api_key", "rate_history_path", "rate_cutoff", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().strip('"').strip("'").strip()
        return v

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


_config: Settings | None = None


def get_config() -> Settings:
    """Get or create the shared Settings singleton."""
    global _config
    if _config is None:
        _config = Settings()
    return _config
