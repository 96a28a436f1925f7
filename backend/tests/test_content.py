from pathlib import Path

from hypothesis import given, strategies as st
import pytest

from portfolio_api.content import (
    EXPECTED_CATEGORIES,
    calculate_proficiency_percentage,
    calculate_reading_time,
    format_duration,
    list_blog_posts,
    load_portfolio,
    paginate,
    prepare_blog_post,
    sort_experiences_by_date,
    sort_projects_by_featured,
    truncate_text,
    validate_skill_categories,
)


def test_truncate_keeps_short_text():
    assert truncate_text("hello", 5) == "hello"
    assert truncate_text("", 0) == ""


def test_truncate_trims_trailing_space_before_ellipsis():
    assert truncate_text("hello world", 6) == "hello..."
    assert truncate_text("abcdef", 3) == "abc..."


@given(text=st.text(), limit=st.integers(min_value=0, max_value=200))
def test_truncate_is_prefix_plus_ellipsis(text: str, limit: int):
    result = truncate_text(text, limit)
    if len(text) <= limit:
        assert result == text
    else:
        assert len(result) <= limit + 3
        assert result.endswith("...")
        assert text.startswith(result[:-3])


def test_reading_time():
    assert calculate_reading_time("") == 1
    assert calculate_reading_time("word " * 200) == 1
    assert calculate_reading_time("word " * 201) == 2
    assert calculate_reading_time("  spaced\n\nout\twords  ") == 1


projects_strategy = st.lists(st.booleans(), max_size=30).map(
    lambda flags: [{"id": f"p{index}", "is_featured": flag} for index, flag in enumerate(flags)]
)


@given(projects=projects_strategy)
def test_featured_projects_come_first_and_order_is_stable(projects):
    result = sort_projects_by_featured(projects)

    assert sorted(p["id"] for p in result) == sorted(p["id"] for p in projects)
    flags = [p["is_featured"] for p in result]
    assert flags == sorted(flags, reverse=True)
    assert [p for p in result if p["is_featured"]] == [p for p in projects if p["is_featured"]]
    assert [p for p in result if not p["is_featured"]] == [p for p in projects if not p["is_featured"]]


def test_featured_sort_does_not_mutate_input():
    projects = [{"id": "a", "is_featured": False}, {"id": "b", "is_featured": True}]
    result = sort_projects_by_featured(projects)
    assert [p["id"] for p in result] == ["b", "a"]
    assert [p["id"] for p in projects] == ["a", "b"]


def test_experiences_sorted_newest_first():
    items = [
        {"id": "old", "start_date": "2023-01"},
        {"id": "new", "start_date": "2025-10"},
        {"id": "mid", "start_date": "2025-06"},
        {"id": "dec", "start_date": "2024-12"},
    ]
    assert [item["id"] for item in sort_experiences_by_date(items)] == ["new", "mid", "dec", "old"]


@pytest.mark.parametrize("level,expected", [(1, 20), (2, 40), (3, 60), (4, 80), (5, 100)])
def test_proficiency_percentage(level, expected):
    assert calculate_proficiency_percentage(level) == expected


@pytest.mark.parametrize("level", [0, 6, -1])
def test_proficiency_percentage_rejects_out_of_range(level):
    with pytest.raises(ValueError):
        calculate_proficiency_percentage(level)


def test_format_duration():
    assert format_duration("2023-03") == "Mar 2023 - Present"
    assert format_duration("2024-12", "2025-05") == "Dec 2024 - May 2025"


def test_validate_skill_categories():
    good = [{"category": name} for name in EXPECTED_CATEGORIES]
    assert validate_skill_categories(good) is True
    assert validate_skill_categories(good[:3]) is False
    assert validate_skill_categories(good[:3] + [{"category": "Soft Skills"}]) is False


def test_paginate_clamps_page_into_range():
    items = list(range(14))

    first = paginate(items, 1)
    assert first["posts"] == list(range(6))
    assert first["total_pages"] == 3
    assert first["has_next_page"] is True
    assert first["has_prev_page"] is False

    last = paginate(items, 99)
    assert last["current_page"] == 3
    assert last["posts"] == [12, 13]
    assert last["has_next_page"] is False

    assert paginate(items, -4)["current_page"] == 1


def test_paginate_empty():
    result = paginate([], 3)
    assert result["current_page"] == 1
    assert result["total_pages"] == 0
    assert result["posts"] == []
    assert result["has_next_page"] is False


def test_bundled_portfolio_loads():
    data = load_portfolio()
    assert validate_skill_categories(data["skills"])
    assert data["projects"]


def test_portfolio_with_bad_categories_is_rejected(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    path.write_text('{"projects": [], "experience": [], "skills": [{"category": "Languages", "skills": []}]}')

    with pytest.raises(ValueError):
        load_portfolio(str(path))


def test_prepare_blog_post_applies_display_limits():
    post = prepare_blog_post(
        {
            "slug": "long-post",
            "title": "T" * 100,
            "excerpt": "e" * 200,
            "published_date": "2024-01-01",
            "tags": ["a", "b", "c", "d", "e", "f"],
            "content": "word " * 450,
        }
    )

    assert post["title"] == "T" * 80 + "..."
    assert post["excerpt"] == "e" * 160 + "..."
    assert post["tags"] == ["a", "b", "c", "d", "e"]
    assert post["reading_time"] == 3
    assert post["cover_image"] == "/images/blog/default-cover.jpg"
    assert post["is_draft"] is False


def test_prepare_blog_post_defaults_missing_title():
    post = prepare_blog_post({"slug": "x", "published_date": "2024-01-01"})
    assert post["title"] == "Untitled"
    assert post["reading_time"] == 1


def test_list_blog_posts_newest_first_and_hides_drafts():
    posts = [
        {"slug": "old", "published_date": "2023-01-05"},
        {"slug": "draft", "published_date": "2024-09-01", "is_draft": True},
        {"slug": "new", "published_date": "2024-02-10"},
    ]

    assert [post["slug"] for post in list_blog_posts(posts, include_drafts=False)] == ["new", "old"]
    assert [post["slug"] for post in list_blog_posts(posts, include_drafts=True)] == ["draft", "new", "old"]
