from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from quarterplan.models.base import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, index=True)  # catalog id, e.g. "ecs36a"
    code = Column(String, nullable=False, index=True)  # e.g. "ECS 036A"
    name = Column(String, nullable=True)
    units = Column(Integer, nullable=False, default=4)
    description = Column(Text, nullable=True)
    typically_offered = Column(String, nullable=True)  # e.g. "fall,spring"; empty = every quarter

    prerequisites = relationship(
        "CoursePrerequisite",
        back_populates="course",
        cascade="all, delete-orphan",
    )


class CoursePrerequisite(Base):
    __tablename__ = "course_prerequisites"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    # Not a foreign key: prerequisites may point outside the loaded catalog.
    prereq_id = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    course = relationship("Course", back_populates="prerequisites")
