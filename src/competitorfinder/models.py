"""Domain models used across the application."""

from __future__ import annotations

import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def generate_id() -> str:
    """Return a fresh identifier for results the upstream API left unnamed."""

    return uuid.uuid4().hex


class SearchQuery(BaseModel):
    """Body accepted by the similarity proxy."""

    url: str


class ContentsQuery(BaseModel):
    """Body accepted by the content proxy."""

    urls: List[str] = Field(..., min_length=1)


class CompetitorResult(BaseModel):
    """A similar company, normalised from a find-similar result entry."""

    id: str = Field(default_factory=generate_id)
    title: str = "Unknown Company"
    url: str
    summary: Optional[str] = None
    text: Optional[str] = None
    favicon: Optional[str] = None


class ContentResult(BaseModel):
    """Expanded page content returned by the contents operation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    url: str
    published_date: Optional[str] = Field(default=None, alias="publishedDate")
    author: Optional[str] = None
    text: Optional[str] = None
    summary: Optional[str] = None
    highlights: Optional[List[str]] = None
    subpages: Optional[List["ContentResult"]] = None

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, value: object) -> object:
        return "" if value is None else value


ContentResult.model_rebuild()
