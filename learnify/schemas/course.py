# learnify/schemas/course.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from learnify.schemas.base import CamelModel

ContentType = Literal["pdf", "text"]


class CourseContentIn(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    content_type: ContentType
    file_path: Optional[str] = Field(default=None, max_length=500)


class CourseContentPublic(CamelModel):
    id: int
    course_id: int
    title: str
    content_type: ContentType
    file_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourseCreate(CamelModel):
    title: str = Field(min_length=3, max_length=255)
    description: Optional[str] = Field(default=None, min_length=10)
    price: float = Field(ge=0)
    duration_hours: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True
    course_content: Optional[List[CourseContentIn]] = None


class CourseUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=255)
    description: Optional[str] = Field(default=None, min_length=10)
    price: Optional[float] = Field(default=None, ge=0)
    duration_hours: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None
    # present (even empty) -> replace all content; absent -> keep it
    course_content: Optional[List[CourseContentIn]] = None

    @field_validator("title", "price", "is_active", "course_content")
    @classmethod
    def not_null(cls, value):
        # only runs for values the client actually sent
        if value is None:
            raise ValueError("must not be null")
        return value


class CourseBrief(CamelModel):
    id: int
    title: str
    description: Optional[str] = None


class CourseSummary(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    price: float
    duration_hours: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CoursePublic(CourseSummary):
    contents: List[CourseContentPublic] = []


class CourseWithEnrollmentCount(CourseSummary):
    enrollment_count: int = 0


class CourseContentListing(CamelModel):
    course: CourseBrief
    contents: List[CourseContentPublic]


class CourseEnrollmentCount(CamelModel):
    course_id: int
    enrollment_count: int
