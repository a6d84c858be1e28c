# cryptonews

`cryptonews` is a small HTTP service, built on aiohttp, that collects recent
news about a cryptocurrency. It asks NewsAPI for last week's most popular
articles and CoinDesk for its latest articles in a matching category, merges
the two lists newest first and returns them as JSON.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

You need a NewsAPI key. Put it in the `newsAPI` environment variable, or in a
`.env` file in the directory you start the server from (or in one of its
parent directories):

```
newsAPI=placeholder
```

The key is read on every request, so it can be changed without a restart.

## Running

```
cryptonews
```

Options:

- `--host` (default `0.0.0.0`)
- `--port` (default `3000`)
- `--views` directory holding `index.html` (default `src/views`)
- `--assets` directory of static files (default `src/assets`)

The default directories are relative to the current working directory.

## Endpoints

- `GET /news?coin=<symbol>`: returns combined news for a coin. These symbols
  are accepted, and case does not matter:
  - Bitcoin: `btc`, `bitcoin`, `₿`
  - Ethereum: `eth`, `ethereum`, `ether`
  - Ripple: `xrp`, `ripple`

  The coin's full name is used as the NewsAPI search term. Bitcoin is looked
  up in the CoinDesk `BTC` category; every other coin uses `ETH`.

  The response has the NewsAPI shape:
  `{"status": "ok", "totalResults": N, "articles": [...]}`, each article with
  `source`, `author`, `title`, `description`, `url`, `urlToImage`,
  `publishedAt` and `content`. CoinDesk articles get their subtitle as the
  description (or the first 150 characters of the body followed by `...`) and
  the first 300 characters of the body as content.

  Errors, each as an `{"error": ...}` body:
  - `400` if `coin` is missing or not one of the symbols above;
  - `500` if the NewsAPI key is not set or NewsAPI cannot be fetched or
    decoded. If only CoinDesk fails, the NewsAPI articles are returned alone.
- `GET /`: serves `index.html` from the views directory, or `404` if it is
  missing.
- `GET /assets/<path>`: serves files from the assets directory. A directory
  path serves its `index.html`; paths outside the directory give `404`.

## Rate limiting

Each client is identified by its IP address and `User-Agent` header. Counting
starts at a client's first request; the count restarts once more than a minute
has passed since then. The eleventh request within that minute is refused, and
the client is then blocked for one minute. Refused requests get
`429 Too Many Requests` with a plain-text message. Requests to paths with no
route are not counted.

## Use from Python

```python
from aiohttp import web

from cryptonews.app import create_app
from cryptonews.rate_limit import RateLimiter

app = create_app("views", "assets", RateLimiter())
web.run_app(app, port=3000)
```

Other pieces can be used on their own:

- `cryptonews.news_service`: `fetch_data`, `fetch_coindesk_data` and
  `fetch_combined_news` take an `aiohttp.ClientSession`; failures raise
  `NewsFetchError`. `pick_category` chooses the CoinDesk category.
- `cryptonews.models`: the `Article`, `Source` and `NewsApiResponse`
  dataclasses (`to_dict()` gives the JSON shape), `parse_news_api_response`,
  `parse_coindesk_response` (raising `ValueError` on malformed data) and
  `adapt_coindesk_to_news_api`.
- `cryptonews.rate_limit`: `RateLimiter.should_allow_request(user_req_id)`,
  which accepts a custom millisecond clock, and `make_rate_limit_middleware`.
- `cryptonews.utils`: `sanitize_coin_input`, `get_news_api_key`,
  `get_date_week_ago` and `get_current_time_millis`.

## What it does not include

The package ships no home page and no static assets. `GET /` and `/assets/`
only serve files you place in the views and assets directories yourself.
Rate-limit counts are kept in memory, so they are lost on restart and are not
shared between server processes.