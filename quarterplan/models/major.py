from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from quarterplan.models.base import Base


class Major(Base):
    __tablename__ = "majors"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    degree = Column(String, nullable=False, default="BS")  # BA/BS
    college = Column(String, nullable=True)

    requirements = relationship(
        "RequirementGroup",
        back_populates="major",
        cascade="all, delete-orphan",
    )


class RequirementGroup(Base):
    __tablename__ = "requirement_groups"

    id = Column(Integer, primary_key=True, index=True)
    major_id = Column(String, ForeignKey("majors.id"), nullable=False, index=True)
    group_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    min_units = Column(Integer, nullable=True)
    choose = Column(Integer, nullable=True)  # "choose N from list"
    position = Column(Integer, nullable=False, default=0)

    major = relationship("Major", back_populates="requirements")
    courses = relationship(
        "RequirementCourse",
        back_populates="requirement",
        cascade="all, delete-orphan",
    )


class RequirementCourse(Base):
    __tablename__ = "requirement_courses"

    id = Column(Integer, primary_key=True, index=True)
    requirement_id = Column(Integer, ForeignKey("requirement_groups.id"), nullable=False)
    course_id = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    requirement = relationship("RequirementGroup", back_populates="courses")
