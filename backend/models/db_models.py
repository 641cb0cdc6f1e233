# models/db_models.py
import uuid
from datetime import datetime
from typing import Optional, List

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

class Author(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    # Naive UTC, see core.dates.to_storage_utc
    date_of_birth: datetime = Field(sa_type=DateTime(timezone=False))
    date_of_death: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    main_category: str = Field(max_length=50, index=True)

    courses: List["Course"] = Relationship(back_populates="author", cascade_delete=True)

class Course(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1500)

    author_id: uuid.UUID = Field(foreign_key="author.id", index=True)

    author: Optional[Author] = Relationship(back_populates="courses")
