"""HTTP application: the news endpoint, the home page and static assets."""

from __future__ import annotations

import argparse
from collections.abc import AsyncIterator
from pathlib import Path

import aiohttp
from aiohttp import web

from cryptonews.news_service import NewsFetchError, fetch_combined_news
from cryptonews.rate_limit import RateLimiter, make_rate_limit_middleware
from cryptonews.utils import sanitize_coin_input

COIN_KEY = "coin"
DEFAULT_VIEWS_DIR = Path("src/views")
DEFAULT_ASSETS_DIR = Path("src/assets")
SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)


async def get_crypto_news(request: web.Request) -> web.Response:
    """Handle ``GET /news?coin=...``."""
    coins = request.query.getall(COIN_KEY, [])
    if not coins:
        return web.json_response({"error": "You did not pass any coin!"}, status=400)

    coin_name = sanitize_coin_input(coins[-1])
    if coin_name is None:
        return web.json_response({"error": "You passed unknown symbol!"}, status=400)

    try:
        news = await fetch_combined_news(request.app[SESSION_KEY], coin_name)
    except NewsFetchError as err:
        print(f"Error during fetch: {err}")
        return web.json_response({"error": f"Failed to fetch news: {err}"}, status=500)
    return web.json_response(news.to_dict())


async def _client_session(app: web.Application) -> AsyncIterator[None]:
    if SESSION_KEY in app:
        yield
        return
    async with aiohttp.ClientSession() as session:
        app[SESSION_KEY] = session
        yield


def _home_handler(index: Path):
    async def home(request: web.Request) -> web.FileResponse:
        if not index.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(index)

    return home


def _assets_handler(assets_dir: Path):
    async def asset(request: web.Request) -> web.FileResponse:
        base = assets_dir.resolve()
        target = (base / request.match_info["path"]).resolve()
        if target.is_dir():
            target = target / "index.html"
        if not target.is_relative_to(base) or not target.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(target)

    return asset


def create_app(
    views_dir: str | Path | None = None,
    assets_dir: str | Path | None = None,
    limiter: RateLimiter | None = None,
) -> web.Application:
    """Build the web application with routes and the rate limiter."""
    views = Path(views_dir) if views_dir is not None else DEFAULT_VIEWS_DIR
    assets = Path(assets_dir) if assets_dir is not None else DEFAULT_ASSETS_DIR
    app = web.Application(middlewares=[make_rate_limit_middleware(limiter or RateLimiter())])
    app.cleanup_ctx.append(_client_session)
    app.router.add_get("/news", get_crypto_news)
    app.router.add_get("/", _home_handler(views / "index.html"))
    app.router.add_get("/assets/{path:.*}", _assets_handler(assets))
    return app


def main(argv: list[str] | None = None) -> None:
    """Run the news server."""
    parser = argparse.ArgumentParser(prog="cryptonews", description="Serve crypto news.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    parser.add_argument("--views", type=Path, default=DEFAULT_VIEWS_DIR)
    parser.add_argument("--assets", type=Path, default=DEFAULT_ASSETS_DIR)
    args = parser.parse_args(argv)

    app = create_app(args.views, args.assets)
    print(f"Listening on localhost:{args.port}")
    web.run_app(app, host=args.host, port=args.port, print=None)