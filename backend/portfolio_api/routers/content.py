from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..content import (
    calculate_proficiency_percentage,
    format_duration,
    list_blog_posts,
    load_portfolio,
    paginate,
    sort_experiences_by_date,
    sort_projects_by_featured,
    truncate_text,
)
from ..schemas import BlogPageResponse, ExperienceItem, ProjectItem, SkillCategoryItem, SkillItem

router = APIRouter(prefix="/api", tags=["content"])

SHORT_DESCRIPTION_LIMIT = 120
FULL_DESCRIPTION_LIMIT = 500


def get_portfolio() -> dict[str, Any]:
    return load_portfolio()


@router.get("/projects", response_model=list[ProjectItem])
async def list_projects(portfolio: dict[str, Any] = Depends(get_portfolio)) -> list[ProjectItem]:
    items = []
    for project in sort_projects_by_featured(portfolio.get("projects", [])):
        items.append(
            ProjectItem(
                **{
                    **project,
                    "short_description": truncate_text(project["short_description"], SHORT_DESCRIPTION_LIMIT),
                    "full_description": truncate_text(project["full_description"], FULL_DESCRIPTION_LIMIT),
                }
            )
        )
    return items


@router.get("/experience", response_model=list[ExperienceItem])
async def list_experience(portfolio: dict[str, Any] = Depends(get_portfolio)) -> list[ExperienceItem]:
    return [
        ExperienceItem(**item, duration=format_duration(item["start_date"], item.get("end_date")))
        for item in sort_experiences_by_date(portfolio.get("experience", []))
    ]


@router.get("/skills", response_model=list[SkillCategoryItem])
async def list_skills(portfolio: dict[str, Any] = Depends(get_portfolio)) -> list[SkillCategoryItem]:
    return [
        SkillCategoryItem(
            category=group["category"],
            skills=[
                SkillItem(
                    name=skill["name"],
                    proficiency=skill["proficiency"],
                    percentage=calculate_proficiency_percentage(skill["proficiency"]),
                )
                for skill in group["skills"]
            ],
        )
        for group in portfolio.get("skills", [])
    ]


@router.get("/blog", response_model=BlogPageResponse)
async def list_blog(
    page: int = Query(1),
    portfolio: dict[str, Any] = Depends(get_portfolio),
) -> BlogPageResponse:
    # Out-of-range pages are clamped, not rejected.
    posts = list_blog_posts(portfolio.get("posts", []), include_drafts=not settings.is_production)
    return BlogPageResponse(**paginate(posts, page))
