# core/seed.py - Sample authors and courses for a fresh database
import uuid
from datetime import datetime

from sqlmodel import Session, select, func

from core.logger import get_logger
from models.db_models import Author, Course

logger = get_logger(__name__)

SEED_AUTHORS = [
    ("d28888e9-2ba9-473a-a40f-e38cb54f9b35", "Berry", "Griffin Beak Eldritch", datetime(1650, 7, 23), "Ships", [
        ("5b1c2b4d-48c7-402a-80c3-cc796ad49c6b", "Commandeering a Ship Without Getting Caught",
         "Commandeering a ship in rough waters isn't easy. Commandeering it without getting caught is even harder."),
        ("d8663e5e-7494-4f81-8739-6e0de1bea7ee", "Overthrowing Mutiny",
         "In this course, the author provides tips to avoid, or, if needed, overthrow pirate mutiny."),
    ]),
    ("da2fd609-d754-4feb-8acd-c4f9ff13ba96", "Nancy", "Swashbuckler Rye", datetime(1668, 5, 21), "Rum", [
        ("d173e20d-159e-4127-9ce9-b0ac2564ad97", "Avoiding Brawls While Drinking as Much Rum as You Desire",
         "Every good pirate loves rum, but it also has a tendency to get you into trouble."),
    ]),
    ("2902b665-1190-4c70-9915-b9c2d7680450", "Eli", "Ivory Bones Sweet", datetime(1701, 12, 16), "Singing", [
        ("40ff5488-fdab-45b5-bc3a-14302d59869a", "Singalong Pirate Hits",
         "In this course you'll learn how to sing all-time favourite pirate songs."),
    ]),
    ("102b566b-ba1f-404c-b2df-e2cde39ade09", "Arnold", "Bo Stutt", datetime(1702, 3, 6), "Singing", []),
    ("5b3621c0-7b12-4e80-9c8b-3398cba7ee05", "Seabury", "Toxic Reyson", datetime(1690, 11, 23), "Maps", [
        ("d3f5c6a8-2b3c-4a9f-9e3e-7c1b2a4d5e6f", "Reading Treasure Maps",
         "Learn to tell a real treasure map from a forgery before you start digging."),
    ]),
    ("2aadd2df-7caf-45ab-9355-7f6332985a87", "Rutherford", "Fearless Flint", datetime(1723, 3, 5), "General debauchery", []),
    ("2ee49fe3-edf2-4f91-8409-3eb25ce6ca51", "Atherton", "Bugsy Crow", datetime(1721, 10, 11), "Ships", []),
]

def build_seed_authors() -> list:
    authors = []
    for author_id, first_name, last_name, date_of_birth, main_category, courses in SEED_AUTHORS:
        authors.append(Author(
            id=uuid.UUID(author_id),
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            main_category=main_category,
            courses=[
                Course(id=uuid.UUID(course_id), title=title, description=description)
                for course_id, title, description in courses
            ]
        ))
    return authors

def seed_database(session: Session) -> int:
    """Insert the sample data when the authors table is empty. Returns rows added."""
    existing = session.exec(select(func.count()).select_from(Author)).one()
    if existing:
        return 0

    authors = build_seed_authors()
    session.add_all(authors)
    session.commit()
    logger.info(f"Seeded {len(authors)} authors")
    return len(authors)
