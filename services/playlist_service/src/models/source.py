"""Source reference model: what to crawl and how far."""

from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceReference(BaseModel):
    """A URI plus an optional page budget identifying what to crawl."""

    model_config = ConfigDict(frozen=True)

    uri: str = Field(min_length=1, description="Absolute http(s) URI of the first page")
    page_budget: Optional[int] = Field(
        None, ge=1, description="Number of pages to follow; None uses the strategy default"
    )

    @field_validator("uri")
    @classmethod
    def validate_uri(cls, v: str) -> str:
        """Require an absolute http(s) URI."""
        cleaned = v.strip()
        parsed = urlparse(cleaned)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("uri must be an absolute http(s) URI")
        return cleaned

    @property
    def host(self) -> str:
        """Lower-cased host name of the URI."""
        return (urlparse(self.uri).hostname or "").lower()
