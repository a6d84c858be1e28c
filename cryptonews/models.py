"""News data models, payload parsing and the CoinDesk-to-NewsAPI adapter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

_DESCRIPTION_LIMIT = 150
_CONTENT_LIMIT = 300


@dataclass
class Source:
    id: str | None
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class Article:
    source: Source
    author: str | None
    title: str
    description: str | None
    url: str
    url_to_image: str | None
    published_at: str
    content: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.to_dict(),
            "author": self.author,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "urlToImage": self.url_to_image,
            "publishedAt": self.published_at,
            "content": self.content,
        }


@dataclass
class NewsApiResponse:
    status: str
    total_results: int
    articles: list[Article]

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "totalResults": self.total_results,
            "articles": [article.to_dict() for article in self.articles],
        }


@dataclass
class CoinDeskSourceData:
    source_type: str
    id: int
    source_key: str | None
    name: str
    image_url: str
    url: str
    lang: str | None
    source_type_str: str | None


@dataclass
class CoinDeskCategoryData:
    category_type: str
    id: int
    name: str
    category: str


@dataclass
class CoinDeskArticle:
    article_type: str
    id: int
    guid: str | None
    published_on: int
    image_url: str
    title: str
    subtitle: str | None
    authors: str | None
    url: str
    source_id: int
    body: str
    keywords: str | None
    source_data: CoinDeskSourceData
    category_data: list[CoinDeskCategoryData] | None


@dataclass
class CoinDeskResponse:
    data: list[CoinDeskArticle]
    err: Any


def _field(data: Any, key: str, kind: type, *, optional: bool = False) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object holding `{key}`")
    value = data.get(key)
    if value is None:
        if optional:
            return None
        raise ValueError(f"missing field `{key}`")
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(f"invalid type for field `{key}`")
    return value


def _parse_article(data: Any) -> Article:
    source = _field(data, "source", dict)
    return Article(
        source=Source(
            id=_field(source, "id", str, optional=True),
            name=_field(source, "name", str),
        ),
        author=_field(data, "author", str, optional=True),
        title=_field(data, "title", str),
        description=_field(data, "description", str, optional=True),
        url=_field(data, "url", str),
        url_to_image=_field(data, "urlToImage", str, optional=True),
        published_at=_field(data, "publishedAt", str),
        content=_field(data, "content", str, optional=True),
    )


def parse_news_api_response(data: Any) -> NewsApiResponse:
    """Build a :class:`NewsApiResponse` from decoded NewsAPI JSON."""
    return NewsApiResponse(
        status=_field(data, "status", str),
        total_results=_field(data, "totalResults", int),
        articles=[_parse_article(item) for item in _field(data, "articles", list)],
    )


def _parse_source_data(data: Any) -> CoinDeskSourceData:
    return CoinDeskSourceData(
        source_type=_field(data, "TYPE", str),
        id=_field(data, "ID", int),
        source_key=_field(data, "SOURCE_KEY", str, optional=True),
        name=_field(data, "NAME", str),
        image_url=_field(data, "IMAGE_URL", str),
        url=_field(data, "URL", str),
        lang=_field(data, "LANG", str, optional=True),
        source_type_str=_field(data, "SOURCE_TYPE", str, optional=True),
    )


def _parse_category(data: Any) -> CoinDeskCategoryData:
    return CoinDeskCategoryData(
        category_type=_field(data, "TYPE", str),
        id=_field(data, "ID", int),
        name=_field(data, "NAME", str),
        category=_field(data, "CATEGORY", str),
    )


def _parse_coindesk_article(data: Any) -> CoinDeskArticle:
    categories = _field(data, "CATEGORY_DATA", list, optional=True)
    return CoinDeskArticle(
        article_type=_field(data, "TYPE", str),
        id=_field(data, "ID", int),
        guid=_field(data, "GUID", str, optional=True),
        published_on=_field(data, "PUBLISHED_ON", int),
        image_url=_field(data, "IMAGE_URL", str),
        title=_field(data, "TITLE", str),
        subtitle=_field(data, "SUBTITLE", str, optional=True),
        authors=_field(data, "AUTHORS", str, optional=True),
        url=_field(data, "URL", str),
        source_id=_field(data, "SOURCE_ID", int),
        body=_field(data, "BODY", str),
        keywords=_field(data, "KEYWORDS", str, optional=True),
        source_data=_parse_source_data(_field(data, "SOURCE_DATA", dict)),
        category_data=None if categories is None else [_parse_category(c) for c in categories],
    )


def parse_coindesk_response(data: Any) -> CoinDeskResponse:
    """Build a :class:`CoinDeskResponse` from decoded CoinDesk JSON."""
    if not isinstance(data, dict) or "Err" not in data:
        raise ValueError("missing field `Err`")
    return CoinDeskResponse(
        data=[_parse_coindesk_article(item) for item in _field(data, "Data", list)],
        err=data["Err"],
    )


def _truncate(text: str, limit: int) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def _iso_timestamp(seconds: int) -> str:
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        moment = datetime.now(timezone.utc)
    return moment.isoformat()


def _adapt_article(article: CoinDeskArticle) -> Article:
    description = article.subtitle
    if description is None:
        description = _truncate(article.body, _DESCRIPTION_LIMIT)
    return Article(
        source=Source(id=str(article.source_id), name=article.source_data.name),
        author=article.authors,
        title=article.title,
        description=description,
        url=article.url,
        url_to_image=article.image_url,
        published_at=_iso_timestamp(article.published_on),
        content=_truncate(article.body, _CONTENT_LIMIT),
    )


def adapt_coindesk_to_news_api(coindesk_response: CoinDeskResponse) -> NewsApiResponse:
    """Convert CoinDesk articles into the NewsAPI response shape."""
    articles = [_adapt_article(item) for item in coindesk_response.data]
    return NewsApiResponse("ok", len(articles), articles)