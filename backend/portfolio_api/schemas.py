from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_FIELD_LENGTH = 10_000


class ContactRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=MAX_FIELD_LENGTH)
    email: str = Field(max_length=MAX_FIELD_LENGTH)
    message: str = Field(max_length=MAX_FIELD_LENGTH)
    honeypot: str = Field(default="", max_length=MAX_FIELD_LENGTH)


class ContactErrors(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    general: Optional[str] = None


class ContactResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    errors: Optional[ContactErrors] = None


class ProjectItem(BaseModel):
    id: str
    title: str
    short_description: str
    full_description: str
    tech_stack: list[str]
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_featured: bool
    category: Optional[str] = None


class ExperienceItem(BaseModel):
    id: str
    company: str
    role: str
    start_date: str
    end_date: Optional[str] = None
    duration: str
    location: Optional[str] = None
    achievements: list[str]
    technologies: list[str] = []


class SkillItem(BaseModel):
    name: str
    proficiency: int = Field(ge=1, le=5)
    percentage: int


class SkillCategoryItem(BaseModel):
    category: str
    skills: list[SkillItem]


class BlogPostItem(BaseModel):
    slug: str
    title: str
    excerpt: str
    published_date: str
    updated_date: Optional[str] = None
    reading_time: int = Field(ge=1)
    tags: list[str] = Field(max_length=5)
    cover_image: str
    is_draft: bool = False


class BlogPageResponse(BaseModel):
    posts: list[BlogPostItem]
    total_pages: int
    current_page: int
    total_posts: int
    has_next_page: bool
    has_prev_page: bool
