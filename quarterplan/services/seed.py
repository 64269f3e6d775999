import json
import logging
from pathlib import Path

from sqlalchemy.orm import Session

from quarterplan.models.course import Course
from quarterplan.schemas.course import CourseCreate
from quarterplan.schemas.major import MajorCreate
from quarterplan.services.courses import bulk_create_courses
from quarterplan.services.majors import create_major

logger = logging.getLogger(__name__)


def seed_catalog(db: Session, path: str | Path) -> int:
    """Load the JSON catalog into empty tables. Returns the number of courses added."""
    if db.query(Course).first() is not None:
        return 0
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    courses = bulk_create_courses(db, [CourseCreate(**row) for row in data.get("courses", [])])
    for row in data.get("majors", []):
        create_major(db, MajorCreate(**row))
    logger.info("Seeded catalog with %d courses from %s", len(courses), path)
    return len(courses)
