# models/course_models.py
import uuid
from typing import Optional

from pydantic import Field, model_validator

from models.common_models import CamelModel
from models.db_models import Course

# ===== REQUEST MODELS =====

class CourseForManipulationDto(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1500)

    @model_validator(mode="after")
    def title_differs_from_description(self):
        if self.description is not None and self.title == self.description:
            raise ValueError("The provided description should be different from the title.")
        return self

    def to_course(self) -> Course:
        return Course(title=self.title, description=self.description)

class CourseForCreationDto(CourseForManipulationDto):
    pass

class CourseForUpdateDto(CourseForManipulationDto):
    description: str = Field(..., max_length=1500)

    def apply_to(self, course: Course) -> Course:
        """Copy the updatable values onto an existing course entity"""
        course.title = self.title
        course.description = self.description
        return course

# ===== RESPONSE MODELS =====

class CourseDto(CamelModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    author_id: uuid.UUID

    @classmethod
    def from_course(cls, course: Course):
        """Convert Course DB model to response format"""
        return cls(
            id=course.id,
            title=course.title,
            description=course.description,
            author_id=course.author_id
        )
