from urllib.parse import urlparse

from pydantic import BaseModel, field_validator


class AnalyzeRequest(BaseModel):
    url: str
    """Absolute URL of the blog post to analyse.

    Kept as the caller sent it (no trailing-slash normalisation) so that
    ``GET /api/analyses?url=...`` matches exactly.  The http/https scheme
    restriction is enforced by the fetcher.
    """

    @field_validator("url")
    @classmethod
    def must_be_absolute(cls, value: str) -> str:
        parsed = urlparse(value.strip())
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Please provide a valid URL")
        return value.strip()
