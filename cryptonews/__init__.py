"""Combined cryptocurrency news from NewsAPI and CoinDesk, served over HTTP with rate limiting."""

__version__ = "0.1.0"