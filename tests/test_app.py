import aiohttp
import pytest
from aiohttp import test_utils

from cryptonews.app import SESSION_KEY, create_app, main
from cryptonews.news_service import COINDESK_URL, NEWS_API_URL
from cryptonews.rate_limit import LIMIT_MESSAGE, MAX_REQ
from cryptonews.utils import NEWS_API_ENV

NEWS_PAYLOAD = {
    "status": "ok",
    "totalResults": 1,
    "articles": [
        {
            "source": {"id": None, "name": "Example Wire"},
            "author": None,
            "title": "Bitcoin news",
            "description": None,
            "url": "https://news.example.com/1",
            "urlToImage": None,
            "publishedAt": "2024-03-01T10:00:00Z",
            "content": None,
        }
    ],
}

COINDESK_PAYLOAD = {
    "Data": [
        {
            "TYPE": "121",
            "ID": 1,
            "PUBLISHED_ON": 0,
            "IMAGE_URL": "https://img.example.com/a.png",
            "TITLE": "Desk item",
            "URL": "https://desk.example.com/a",
            "SOURCE_ID": 3,
            "BODY": "Body text",
            "SOURCE_DATA": {
                "TYPE": "120",
                "ID": 3,
                "NAME": "Desk",
                "IMAGE_URL": "https://img.example.com/d.png",
                "URL": "https://desk.example.com",
            },
        }
    ],
    "Err": {},
}


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    async def json(self, content_type=None):
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, headers=None, params=None):
        self.calls.append((url, headers, params))
        outcome = self.routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return FakeResponse(outcome)


@pytest.fixture
def site(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(NEWS_API_ENV, "placeholder")
    views = tmp_path / "views"
    assets = tmp_path / "assets"
    views.mkdir()
    assets.mkdir()
    (views / "index.html").write_text("<h1>home</h1>")
    (assets / "style.css").write_text("body {}")
    (tmp_path / "secret.txt").write_text("hidden")
    return views, assets


def _client(app, session):
    app[SESSION_KEY] = session
    return test_utils.TestClient(test_utils.TestServer(app))


@pytest.mark.asyncio
async def test_missing_coin(site):
    app = create_app(*site)
    async with _client(app, FakeSession({})) as client:
        resp = await client.get("/news")
        assert resp.status == 400
        assert await resp.json() == {"error": "You did not pass any coin!"}


@pytest.mark.asyncio
async def test_unknown_coin(site):
    app = create_app(*site)
    async with _client(app, FakeSession({})) as client:
        resp = await client.get("/news", params={"coin": "doge"})
        assert resp.status == 400
        assert await resp.json() == {"error": "You passed unknown symbol!"}


@pytest.mark.asyncio
async def test_news_success(site):
    session = FakeSession({NEWS_API_URL: NEWS_PAYLOAD, COINDESK_URL: COINDESK_PAYLOAD})
    app = create_app(*site)
    async with _client(app, session) as client:
        resp = await client.get("/news", params={"coin": "BTC"})
        body = await resp.json()
        assert resp.status == 200
        assert body["status"] == "ok"
        assert body["totalResults"] == len(body["articles"]) == 2
        assert session.calls[0][2]["q"] == "Bitcoin"


@pytest.mark.asyncio
async def test_news_failure_returns_500(site):
    session = FakeSession({NEWS_API_URL: aiohttp.ClientError("down"), COINDESK_URL: COINDESK_PAYLOAD})
    app = create_app(*site)
    async with _client(app, session) as client:
        resp = await client.get("/news", params={"coin": "eth"})
        body = await resp.json()
        assert resp.status == 500
        assert body["error"].startswith("Failed to fetch news: ")


@pytest.mark.asyncio
async def test_home_and_assets(site):
    app = create_app(*site)
    async with _client(app, FakeSession({})) as client:
        home = await client.get("/")
        style = await client.get("/assets/style.css")
        missing = await client.get("/assets/none.css")
        escape = await client.get("/assets/..%2Fsecret.txt")
        assert home.status == 200
        assert await home.text() == "<h1>home</h1>"
        assert await style.text() == "body {}"
        assert missing.status == 404
        assert escape.status == 404


@pytest.mark.asyncio
async def test_missing_index_is_404(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    app = create_app(tmp_path / "nope", tmp_path / "nope")
    async with _client(app, FakeSession({})) as client:
        resp = await client.get("/")
        assert resp.status == 404


@pytest.mark.asyncio
async def test_rate_limit_applies(site):
    app = create_app(*site)
    async with _client(app, FakeSession({})) as client:
        statuses = []
        for _ in range(MAX_REQ):
            resp = await client.get("/news")
            statuses.append(resp.status)
        blocked = await client.get("/news")
        assert statuses == [400] * MAX_REQ
        assert blocked.status == 429
        assert await blocked.text() == LIMIT_MESSAGE


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit) as excinfo:
        main(["--port", "not-a-number"])
    assert excinfo.value.code == 2