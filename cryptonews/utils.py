"""Small helpers: coin name lookup, environment access and clock readings."""

from __future__ import annotations

import os
import time
from datetime import datetime, timedelta, timezone

from dotenv import find_dotenv, load_dotenv

NEWS_API_ENV = "newsAPI"

_CRYPTO_NAMES: dict[str, str] = {
    "btc": "Bitcoin",
    "bitcoin": "Bitcoin",
    "₿": "Bitcoin",
    "eth": "Ethereum",
    "ethereum": "Ethereum",
    "ether": "Ethereum",
    "xrp": "Ripple",
    "ripple": "Ripple",
}


def get_news_api_key() -> str | None:
    """Return the NewsAPI key from the environment or a ``.env`` file, if any."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)
    key = os.environ.get(NEWS_API_ENV)
    if key is None:
        print(f"Error loading env var: {NEWS_API_ENV} is not set")
    return key


def get_date_week_ago() -> str:
    """Return the UTC date seven days ago as ``YYYY-MM-DD``."""
    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    return week_ago.strftime("%Y-%m-%d")


def sanitize_coin_input(coin_input: str) -> str | None:
    """Map a user-supplied coin symbol or name to its canonical name."""
    return _CRYPTO_NAMES.get(coin_input.lower())


def get_current_time_millis() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000