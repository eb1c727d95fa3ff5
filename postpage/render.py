"""Turn resolved post props into the HTML document."""
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple

from fastapi.templating import Jinja2Templates

from .schemas import Post, PostProps

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
POST_TEMPLATE = "post.html"

_TAG_RE = re.compile(r"(<([^>]+)>)", re.IGNORECASE)
_SHORTCODE_RE = re.compile(r"\[[^\]]*\]")

MetaTag = Tuple[str, Optional[str]]


def strip_tags(value: str | None) -> str:
    """Strip HTML tags and the first ``[shortcode]`` from an excerpt.

    Only the first bracketed group goes; later ones stay. Runs of whitespace
    left behind are collapsed to single spaces.
    """

    if value is None or value == "":
        return ""
    text = _TAG_RE.sub("", str(value))
    text = _SHORTCODE_RE.sub("", text, count=1)
    return " ".join(text.split())


def site_name(host: str) -> str:
    # First label only: "www.example.com" -> "www".
    return host.split(".")[0]


def image_source(post: Post) -> str | None:
    return post.featured_image.node.source_url


def image_alt(post: Post) -> str | None:
    return post.featured_image.node.alt_text or post.title


def build_meta_tags(post: Post, host: str) -> List[MetaTag]:
    return [
        ("og:title", post.title),
        ("og:description", strip_tags(post.excerpt)),
        ("og:type", "article"),
        ("og:locale", "en_US"),
        ("og:site_name", site_name(host)),
        ("article:published_time", post.date_gmt),
        ("article:modified_time", post.modified_gmt),
        ("og:image", image_source(post)),
        ("og:image:alt", image_alt(post)),
    ]


def page_context(props: PostProps) -> dict:
    post = props.post
    return {
        "path": props.path,
        "title": post.title,
        "meta_tags": build_meta_tags(post, props.host),
        "image_src": image_source(post),
        "image_alt": image_alt(post),
        "content": post.content or "",
    }


def render_post(props: PostProps) -> str:
    template = TEMPLATES.get_template(POST_TEMPLATE)
    return template.render(page_context(props))
