# models/author_models.py
import uuid
from datetime import datetime
from typing import Optional, List

from pydantic import Field

from core.dates import get_current_age, to_storage_utc
from models.common_models import CamelModel
from models.course_models import CourseForCreationDto
from models.db_models import Author

# ===== REQUEST MODELS =====

class AuthorForCreationDto(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    date_of_birth: datetime
    main_category: str = Field(..., min_length=1, max_length=50)
    courses: List[CourseForCreationDto] = Field(default_factory=list)

    def to_author(self) -> Author:
        return Author(
            first_name=self.first_name,
            last_name=self.last_name,
            date_of_birth=to_storage_utc(self.date_of_birth),
            main_category=self.main_category,
            courses=[course.to_course() for course in self.courses]
        )

class AuthorForCreationWithDateOfDeathDto(AuthorForCreationDto):
    date_of_death: Optional[datetime] = None

    def to_author(self) -> Author:
        author = super().to_author()
        author.date_of_death = to_storage_utc(self.date_of_death)
        return author

# ===== RESPONSE MODELS =====

class AuthorDto(CamelModel):
    """Friendly author representation"""
    id: uuid.UUID
    name: str
    age: int
    main_category: str

    @classmethod
    def from_author(cls, author: Author):
        """Convert Author DB model to response format"""
        return cls(
            id=author.id,
            name=f"{author.first_name} {author.last_name}",
            age=get_current_age(author.date_of_birth, author.date_of_death),
            main_category=author.main_category
        )

class AuthorFullDto(CamelModel):
    """Full author representation, selected with the author.full media type"""
    id: uuid.UUID
    first_name: str
    last_name: str
    date_of_birth: datetime
    date_of_death: Optional[datetime] = None
    age: int
    main_category: str

    @classmethod
    def from_author(cls, author: Author):
        """Convert Author DB model to the full response format"""
        return cls(
            id=author.id,
            first_name=author.first_name,
            last_name=author.last_name,
            date_of_birth=author.date_of_birth,
            date_of_death=author.date_of_death,
            age=get_current_age(author.date_of_birth, author.date_of_death),
            main_category=author.main_category
        )
