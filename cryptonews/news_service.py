"""Fetching and merging news from NewsAPI and CoinDesk."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from cryptonews.models import (
    NewsApiResponse,
    adapt_coindesk_to_news_api,
    parse_coindesk_response,
    parse_news_api_response,
)
from cryptonews.utils import get_date_week_ago, get_news_api_key

NEWS_API_URL = "https://newsapi.org/v2/everything/"
COINDESK_URL = "https://data-api.coindesk.com/news/v1/article/list"
COINDESK_LIMIT = 30


class NewsFetchError(Exception):
    """Raised when news could not be fetched or decoded."""


def pick_category(query: str) -> str:
    """Choose the CoinDesk category for a coin name."""
    if "ethereum" in query.lower() or "ETH" in query.upper():
        return "ETH"
    if "bitcoin" in query.lower() or "BTC" in query.upper():
        return "BTC"
    return "ETH"


async def _get_json(session: Any, url: str, headers: dict[str, str], params: dict[str, str]) -> Any:
    try:
        async with session.get(url, headers=headers, params=params) as response:
            return await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise NewsFetchError(str(exc) or type(exc).__name__) from exc


async def fetch_data(session: Any, query: str) -> NewsApiResponse:
    """Fetch last week's most popular NewsAPI articles matching ``query``."""
    api_key = get_news_api_key()
    if api_key is None:
        raise NewsFetchError("Failed to get API_KEY")
    headers = {"User-Agent": "Mozilla/5.0", "Accept": "text/html,application/xhtml+xml"}
    params = {
        "q": query,
        "from": get_date_week_ago(),
        "sortBy": "popularity",
        "pageSize": "30",
        "apiKey": api_key,
    }
    payload = await _get_json(session, NEWS_API_URL, headers, params)
    try:
        news = parse_news_api_response(payload)
    except ValueError as exc:
        raise NewsFetchError(str(exc)) from exc
    print("Successfully retrieved news")
    return news


async def fetch_coindesk_data(session: Any, category: str, limit: int) -> NewsApiResponse:
    """Fetch CoinDesk articles in ``category`` and convert them to NewsAPI shape."""
    headers = {"User-Agent": "Mozilla/5.0", "Accept": "application/json"}
    params = {"lang": "EN", "limit": str(limit), "categories": category}
    payload = await _get_json(session, COINDESK_URL, headers, params)
    try:
        coindesk = parse_coindesk_response(payload)
    except ValueError as exc:
        raise NewsFetchError(str(exc)) from exc
    print("Successfully retrieved CoinDesk news")
    return adapt_coindesk_to_news_api(coindesk)


async def fetch_combined_news(session: Any, query: str) -> NewsApiResponse:
    """Merge NewsAPI and CoinDesk articles, newest first.

    A CoinDesk failure falls back to the NewsAPI result alone.
    """
    category = pick_category(query)
    news_api_result = await fetch_data(session, query)
    print(f"NewsAPI returned {len(news_api_result.articles)} articles")

    try:
        coindesk_result = await fetch_coindesk_data(session, category, COINDESK_LIMIT)
    except NewsFetchError as exc:
        print(f"Error fetching from CoinDesk: {exc}")
        return news_api_result
    print(f"CoinDesk API returned {len(coindesk_result.articles)} articles")

    combined = sorted(
        [*news_api_result.articles, *coindesk_result.articles],
        key=lambda article: article.published_at,
        reverse=True,
    )
    return NewsApiResponse("ok", len(combined), combined)