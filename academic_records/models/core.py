from dataclasses import dataclass, field
from typing import Dict, Tuple


# Attendance statuses that count towards the attendance rate.
ATTENDED_STATUSES = ("present", "late")


@dataclass(frozen=True)
class TableSpec:
    """Column constraints for one entity table.

    ``unique`` lists the secondary keys that must be unique across the table,
    ``case_insensitive`` the subset compared after ``str.lower()``, and
    ``foreign_keys`` maps a column to the table it references by id.
    """

    name: str
    unique: Tuple[str, ...] = ()
    case_insensitive: Tuple[str, ...] = ()
    foreign_keys: Dict[str, str] = field(default_factory=dict)


USERS = TableSpec("users", unique=("username",), case_insensitive=("username",))

STUDENTS = TableSpec(
    "students",
    unique=("student_id", "user_id"),
    foreign_keys={"user_id": "users"},
)

FACULTY = TableSpec(
    "faculty",
    unique=("faculty_id", "user_id"),
    foreign_keys={"user_id": "users"},
)

COURSES = TableSpec("courses", unique=("code",))

COURSE_ASSIGNMENTS = TableSpec(
    "course_assignments",
    foreign_keys={"course_id": "courses", "faculty_id": "faculty"},
)

ENROLLMENTS = TableSpec(
    "enrollments",
    foreign_keys={"student_id": "students", "course_assignment_id": "course_assignments"},
)

ATTENDANCE = TableSpec("attendance", foreign_keys={"enrollment_id": "enrollments"})

GRADES = TableSpec("grades", foreign_keys={"enrollment_id": "enrollments"})

EVENTS = TableSpec("events")

ALL_TABLES = (
    USERS,
    STUDENTS,
    FACULTY,
    COURSES,
    COURSE_ASSIGNMENTS,
    ENROLLMENTS,
    ATTENDANCE,
    GRADES,
    EVENTS,
)
