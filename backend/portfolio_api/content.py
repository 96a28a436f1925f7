from __future__ import annotations

from datetime import date
from functools import lru_cache
import json
import math
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from .config import settings

WORDS_PER_MINUTE = 200
POSTS_PER_PAGE = 6
EXPECTED_CATEGORIES = (
    "Languages",
    "Frameworks & Libraries",
    "Tools & Platforms",
    "Concepts",
)


def truncate_text(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def calculate_reading_time(content: str) -> int:
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def sort_projects_by_featured(projects: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Featured projects first; relative order is otherwise kept."""

    return sorted(projects, key=lambda project: not project.get("is_featured", False))


def _month_key(value: str) -> tuple[int, int]:
    year, _, month = value.partition("-")
    return int(year), int(month or 1)


def sort_experiences_by_date(experiences: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Most recent start date first. Dates are ``YYYY-MM``."""

    return sorted(experiences, key=lambda item: _month_key(item["start_date"]), reverse=True)


def calculate_proficiency_percentage(level: int) -> int:
    if level not in range(1, 6):
        raise ValueError(f"Proficiency level must be between 1 and 5, got {level}")
    return level * 20


def format_duration(start_date: str, end_date: Optional[str] = None) -> str:
    def _format(value: str) -> str:
        year, month = _month_key(value)
        return date(year, month, 1).strftime("%b %Y")

    end = _format(end_date) if end_date else "Present"
    return f"{_format(start_date)} - {end}"


def validate_skill_categories(categories: Sequence[dict[str, Any]]) -> bool:
    names = [item["category"] for item in categories]
    return len(names) == len(EXPECTED_CATEGORIES) and all(name in names for name in EXPECTED_CATEGORIES)


def paginate(items: Sequence[Any], page: int = 1, per_page: int = POSTS_PER_PAGE) -> dict[str, Any]:
    total = len(items)
    total_pages = math.ceil(total / per_page)
    current = max(1, min(page, total_pages or 1))
    start = (current - 1) * per_page

    return {
        "posts": list(items[start : start + per_page]),
        "total_pages": total_pages,
        "current_page": current,
        "total_posts": total,
        "has_next_page": current < total_pages,
        "has_prev_page": current > 1,
    }


BLOG_TITLE_LIMIT = 80
BLOG_EXCERPT_LIMIT = 160
BLOG_MAX_TAGS = 5
DEFAULT_COVER_IMAGE = "/images/blog/default-cover.jpg"


def prepare_blog_post(raw: dict[str, Any]) -> dict[str, Any]:
    """Normalise a stored post the way the blog index shows it."""

    content = raw.get("content", "")
    return {
        "slug": raw["slug"],
        "title": truncate_text(raw.get("title") or "Untitled", BLOG_TITLE_LIMIT),
        "excerpt": truncate_text(raw.get("excerpt") or "", BLOG_EXCERPT_LIMIT),
        "published_date": raw["published_date"],
        "updated_date": raw.get("updated_date"),
        "reading_time": calculate_reading_time(content),
        "tags": list(raw.get("tags") or [])[:BLOG_MAX_TAGS],
        "cover_image": raw.get("cover_image") or DEFAULT_COVER_IMAGE,
        "is_draft": bool(raw.get("is_draft", False)),
    }


def list_blog_posts(posts: Iterable[dict[str, Any]], include_drafts: bool) -> list[dict[str, Any]]:
    """Prepared posts, newest first. Dates are ISO ``YYYY-MM-DD``."""

    prepared = [prepare_blog_post(post) for post in posts]
    if not include_drafts:
        prepared = [post for post in prepared if not post["is_draft"]]
    return sorted(prepared, key=lambda post: post["published_date"], reverse=True)


@lru_cache(maxsize=4)
def load_portfolio(path: str = settings.content_path) -> dict[str, Any]:
    with Path(path).open(encoding="utf-8") as handle:
        data = json.load(handle)
    if not validate_skill_categories(data.get("skills", [])):
        raise ValueError(f"Skill categories in {path} must be exactly: {', '.join(EXPECTED_CATEGORIES)}")
    return data
