from quarterplan.models.course import Course, CoursePrerequisite
from quarterplan.models.major import Major, RequirementCourse, RequirementGroup

__all__ = [
    "Course",
    "CoursePrerequisite",
    "Major",
    "RequirementCourse",
    "RequirementGroup",
]
