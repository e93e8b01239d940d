from pydantic import BaseModel


class NewsItem(BaseModel):
    """Headline parsed from an RSS feed item."""

    title: str = ""
    url: str = ""
    publishedAt: str | None = None  # ISO instant
    source: str = "Unknown"
