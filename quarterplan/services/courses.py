from sqlalchemy.orm import Session

from quarterplan.models.course import Course, CoursePrerequisite
from quarterplan.schemas.course import CourseCreate


def bulk_create_courses(db: Session, courses: list[CourseCreate]) -> list[Course]:
    """Insert courses, replacing any existing rows with the same id.

    A payload that repeats an id keeps the last entry for it.
    """
    latest = {course.id: course for course in courses}
    items = []
    for course in latest.values():
        existing = db.get(Course, course.id)
        if existing is not None:
            db.delete(existing)
            db.flush()
        item = Course(
            id=course.id,
            code=course.code,
            name=course.name,
            units=course.units,
            description=course.description,
            typically_offered=",".join(course.typically_offered) or None,
        )
        item.prerequisites = [
            CoursePrerequisite(prereq_id=prereq_id, position=pos)
            for pos, prereq_id in enumerate(course.prerequisites)
        ]
        items.append(item)
    db.add_all(items)
    db.commit()
    for item in items:
        db.refresh(item)
    return items


def course_to_schema(course: Course) -> CourseCreate:
    return CourseCreate(
        id=course.id,
        code=course.code,
        name=course.name,
        units=course.units,
        description=course.description,
        prerequisites=[
            p.prereq_id for p in sorted(course.prerequisites, key=lambda p: p.position)
        ],
        typically_offered=[
            s.strip() for s in (course.typically_offered or "").split(",") if s.strip()
        ],
    )
