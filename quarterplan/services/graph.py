from collections.abc import Iterable

from quarterplan.services.catalog import Catalog


class CyclicPrerequisiteError(ValueError):
    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Cycle detected in prerequisites: {' -> '.join(cycle)}")


def _in_pool_prereqs(course_id: str, pool: set[str], catalog: Catalog) -> list[str]:
    course = catalog.find_course_by_id(course_id)
    if course is None:
        return []
    return [p for p in course.prerequisites if p in pool]


def order(
    pool_ids: Iterable[str],
    catalog: Catalog,
    detect_cycles: bool = False,
) -> list[str]:
    """Order pool ids so prerequisites inside the pool come first.

    Depth-first in input order: a course is appended after all of its in-pool
    prerequisites. Courses are marked visited on entry, so cyclic data still
    terminates (the back edge of the cycle is simply ignored) unless
    ``detect_cycles`` asks for a ``CyclicPrerequisiteError`` instead.
    """
    pool_list = list(pool_ids)
    pool = set(pool_list)
    if detect_cycles:
        cycle = find_cycle(pool_list, catalog)
        if cycle:
            raise CyclicPrerequisiteError(cycle)

    visited: set[str] = set()
    result: list[str] = []
    for root in pool_list:
        if root in visited:
            continue
        visited.add(root)
        stack = [(root, iter(_in_pool_prereqs(root, pool, catalog)))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if child not in visited:
                    visited.add(child)
                    stack.append((child, iter(_in_pool_prereqs(child, pool, catalog))))
                    break
            else:
                stack.pop()
                result.append(node)
    return result


def find_cycle(pool_ids: Iterable[str], catalog: Catalog) -> list[str] | None:
    """First prerequisite cycle among pool ids, as [a, b, ..., a], or None."""
    pool_list = list(pool_ids)
    pool = set(pool_list)
    done: set[str] = set()
    for root in pool_list:
        if root in done:
            continue
        path = [root]
        on_path = {root}
        stack = [iter(_in_pool_prereqs(root, pool, catalog))]
        while stack:
            for child in stack[-1]:
                if child in on_path:
                    return path[path.index(child):] + [child]
                if child not in done:
                    path.append(child)
                    on_path.add(child)
                    stack.append(iter(_in_pool_prereqs(child, pool, catalog)))
                    break
            else:
                stack.pop()
                node = path.pop()
                on_path.discard(node)
                done.add(node)
    return None


def related_course_ids(course_id: str, catalog: Catalog) -> tuple[list[str], list[str]]:
    """(prerequisites, successors) of a course across the whole catalog."""
    course = catalog.find_course_by_id(course_id)
    prereqs = list(course.prerequisites) if course else []
    successors = [c.id for c in catalog.iter_courses() if course_id in c.prerequisites]
    return prereqs, successors
