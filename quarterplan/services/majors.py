from sqlalchemy.orm import Session

from quarterplan.models.major import Major, RequirementCourse, RequirementGroup
from quarterplan.schemas.major import MajorCreate


def create_major(db: Session, payload: MajorCreate) -> Major:
    existing = db.get(Major, payload.id)
    if existing is not None:
        db.delete(existing)
        db.flush()
    major = Major(
        id=payload.id,
        name=payload.name,
        degree=payload.degree,
        college=payload.college,
    )
    db.add(major)
    db.flush()
    for pos, req in enumerate(payload.requirements):
        requirement = RequirementGroup(
            major_id=major.id,
            group_id=req.id,
            name=req.name,
            description=req.description,
            min_units=req.min_units,
            choose=req.choose,
            position=pos,
        )
        db.add(requirement)
        db.flush()
        for course_pos, course_id in enumerate(req.course_ids):
            db.add(
                RequirementCourse(
                    requirement_id=requirement.id,
                    course_id=course_id,
                    position=course_pos,
                )
            )
    db.commit()
    db.refresh(major)
    return major
