"""
Configuration. All settings from env vars (a .env file is picked up too).
No YAML. No TOML parsing. Every invocation reads the environment it was given.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Auto-load .env file so you don't need `export $(grep ...)` every time
from dotenv import load_dotenv
load_dotenv()


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
)


@dataclass
class Config:
    # ── Sources: account ids on the upstream feed ──
    sources: list[str] = field(
        default_factory=lambda: _env_list("RELAY_SOURCES", "107780257626128497")
    )
    feed_base_url: str = os.environ.get("RELAY_FEED_BASE_URL", "https://truthsocial.com")
    feed_user_agent: str = os.environ.get("RELAY_USER_AGENT", DEFAULT_USER_AGENT)
    request_timeout: int = int(os.environ.get("RELAY_REQUEST_TIMEOUT", "20"))

    # LLM provider: "claude" | "openai" | "openrouter"
    llm_provider: str = os.environ.get("RELAY_LLM_PROVIDER", "openrouter")

    # API keys: read from env only, never stored
    anthropic_api_key: str = os.environ.get("ANTHROPIC_API_KEY", "")
    openai_api_key: str = os.environ.get("OPENAI_API_KEY", "")
    openrouter_api_key: str = os.environ.get("OPENROUTER_API_KEY", "")

    # Models
    anthropic_model: str = os.environ.get("RELAY_ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
    openai_model: str = os.environ.get("RELAY_OPENAI_MODEL", "gpt-4o-mini")
    openrouter_model: str = os.environ.get("RELAY_OPENROUTER_MODEL", "anthropic/claude-sonnet-4")

    # ── Cursor store: "sqlite" | "dynamodb" ──
    cursor_backend: str = os.environ.get("RELAY_CURSOR_BACKEND", "sqlite")
    db_path: Path = Path(os.environ.get("RELAY_DB_PATH", "data/relay.db"))
    dynamodb_table: str = os.environ.get("RELAY_TABLE_NAME", os.environ.get("TABLE_NAME", ""))
    aws_region: str = os.environ.get("AWS_REGION", "")

    # ── Primary sink (Bluesky) ──
    bluesky_service: str = os.environ.get("BLUESKY_SERVICE", "https://bsky.social")
    bluesky_username: str = os.environ.get("BLUESKY_USERNAME", "")
    bluesky_password: str = os.environ.get("BLUESKY_PASSWORD", "")
    max_post_length: int = int(os.environ.get("RELAY_MAX_POST_LENGTH", "300"))

    # ── Notification sink (Slack incoming webhook) ──
    slack_webhook_url: str = os.environ.get("SLACK_URL", "")

    # Off = log the cursor that would be written, write nothing. Useful for replaying a feed.
    checkpoint_enabled: bool = _env_bool("RELAY_CHECKPOINT", True)


def load_config() -> Config:
    return Config()
