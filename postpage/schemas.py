"""Shared data structures used across modules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    """Lenient base for content API payloads: camelCase aliases, extras kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class AuthorNode(_ApiModel):
    name: Optional[str] = None


class Author(_ApiModel):
    node: Optional[AuthorNode] = None


class ImageNode(_ApiModel):
    source_url: Optional[str] = Field(default=None, alias="sourceUrl")
    alt_text: Optional[str] = Field(default=None, alias="altText")


class FeaturedImage(_ApiModel):
    node: Optional[ImageNode] = None


class Post(_ApiModel):
    """A blog post as returned by the content API.

    Nothing beyond the field shapes is checked. In particular a post without
    ``featuredImage`` validates fine and only fails once something reads the
    image fields.
    """

    id: Optional[str] = None
    excerpt: Optional[str] = None
    title: Optional[str] = None
    link: Optional[str] = None
    date_gmt: Optional[str] = Field(default=None, alias="dateGmt")
    modified_gmt: Optional[str] = Field(default=None, alias="modifiedGmt")
    content: Optional[str] = None
    author: Optional[Author] = None
    featured_image: Optional[FeaturedImage] = Field(default=None, alias="featuredImage")


@dataclass(slots=True)
class RequestContext:
    path_segments: List[str]
    referer: str | None = None
    fbclid: str | None = None
    host: str = ""


@dataclass(slots=True)
class Redirect:
    destination: str
    permanent: bool = False


@dataclass(slots=True)
class NotFound:
    reason: str = "Post not found"


@dataclass(slots=True)
class PostProps:
    path: str
    post: Post
    host: str


Outcome = Union[Redirect, NotFound, PostProps]
