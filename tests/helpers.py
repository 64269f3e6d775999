from quarterplan.services.catalog import CourseRecord, MajorRecord, RequirementGroup


def course(course_id, units=4, prereqs=(), offered=()):
    return CourseRecord(
        id=course_id,
        code=course_id.upper(),
        name=course_id,
        units=units,
        prerequisites=tuple(prereqs),
        typically_offered=tuple(offered),
    )


def major(major_id, *groups):
    return MajorRecord(
        id=major_id,
        name=major_id.title(),
        degree="BS",
        college="Engineering",
        requirements=tuple(
            RequirementGroup(id=f"{major_id}-{i}", name=f"Group {i}", course_ids=tuple(ids))
            for i, ids in enumerate(groups)
        ),
    )
