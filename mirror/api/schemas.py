"""Response schemas.  Field aliases give the camelCase keys clients expect."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ReaderResponse(_CamelModel):
    title: str
    source_url: str = Field(alias="sourceUrl")
    content_html: str = Field(alias="contentHtml")


class LinkItem(_CamelModel):
    title: str
    url: str


class LinksResponse(_CamelModel):
    source_url: str = Field(alias="sourceUrl")
    links: list[LinkItem]


class PdfTextResponse(_CamelModel):
    text: str
    truncated: bool
    bytes: int


class ResolveResponse(_CamelModel):
    mode: Literal["pdf", "html"]
