"""Composite views assembled by walking foreign keys across the store.

Every function takes a storage object and only uses its public repository
operations. A foreign key that no longer resolves is a dangling reference:
in the default lenient mode the affected branch is dropped (an enrollment
whose course assignment is gone) or reported as ``None`` (a course or
faculty member of an assignment). With ``strict=True`` the first dangling
reference raises :class:`DanglingReferenceError` instead.
"""
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..app_logger import get_logger
from ..storage.exceptions import DanglingReferenceError


logger = get_logger("services.views")

PUBLIC_USER_FIELDS = ("id", "username", "email", "name", "role", "profile_image")


def public_user(user: Optional[dict]) -> Optional[dict]:
    if user is None:
        return None
    return {key: user.get(key) for key in PUBLIC_USER_FIELDS}


def _resolve(
    getter: Callable[[int], Optional[dict]],
    row: dict,
    column: str,
    table: str,
    strict: bool,
) -> Optional[dict]:
    value = row.get(column)
    target = getter(value) if value is not None else None
    if target is None:
        logger.warning("Dangling reference %s.%s -> %r (row %s)", table, column, value, row.get("id"))
        if strict:
            raise DanglingReferenceError(table, column, value)
    return target


def student_details(storage, student_pk: int, strict: bool = False) -> Optional[dict]:
    student = storage.get_student(student_pk)
    if student is None:
        return None
    user = _resolve(storage.get_user, student, "user_id", "students", strict)
    if user is None:
        return None

    blocks = []
    for enrollment in storage.get_enrollments_by_student(student_pk):
        assignment = _resolve(
            storage.get_course_assignment, enrollment, "course_assignment_id", "enrollments", strict
        )
        if assignment is None:
            continue
        course = _resolve(storage.get_course, assignment, "course_id", "course_assignments", strict)
        faculty = _resolve(storage.get_faculty, assignment, "faculty_id", "course_assignments", strict)
        faculty_user = (
            _resolve(storage.get_user, faculty, "user_id", "faculty", strict) if faculty else None
        )
        blocks.append(
            {
                "enrollment": enrollment,
                "course": course,
                "faculty": faculty,
                "faculty_name": faculty_user["name"] if faculty_user else None,
                "attendance": storage.get_attendance_by_enrollment(enrollment["id"]),
                "grades": storage.get_grades_by_enrollment(enrollment["id"]),
                "semester": assignment["semester"],
                "year": assignment["year"],
            }
        )

    return {**student, "user": public_user(user), "enrollments": blocks}


def course_details(storage, course_id: int, strict: bool = False) -> Optional[dict]:
    course = storage.get_course(course_id)
    if course is None:
        return None

    assignments = []
    for assignment in storage.get_course_assignments_by_course(course_id):
        faculty = _resolve(storage.get_faculty, assignment, "faculty_id", "course_assignments", strict)
        user = _resolve(storage.get_user, faculty, "user_id", "faculty", strict) if faculty else None
        assignments.append(
            {**assignment, "faculty": faculty, "faculty_name": user["name"] if user else None}
        )
    return {**course, "assignments": assignments}


def faculty_details(storage, faculty_pk: int, strict: bool = False) -> Optional[dict]:
    faculty = storage.get_faculty(faculty_pk)
    if faculty is None:
        return None
    user = _resolve(storage.get_user, faculty, "user_id", "faculty", strict)

    courses = []
    for assignment in storage.get_course_assignments_by_faculty(faculty_pk):
        course = _resolve(storage.get_course, assignment, "course_id", "course_assignments", strict)
        courses.append({**assignment, "course": course})
    return {**faculty, "user": public_user(user), "courses": courses}


def profiles_with_users(storage, profiles: List[dict]) -> List[dict]:
    """Attach the public user block to each student or faculty profile."""
    return [{**profile, "user": public_user(storage.get_user(profile["user_id"]))} for profile in profiles]


def _enrollment_context(storage, row: dict, table: str, strict: bool) -> Optional[dict]:
    enrollment = _resolve(storage.get_enrollment, row, "enrollment_id", table, strict)
    if enrollment is None:
        return None
    student = _resolve(storage.get_student, enrollment, "student_id", "enrollments", strict)
    user = _resolve(storage.get_user, student, "user_id", "students", strict) if student else None
    assignment = _resolve(
        storage.get_course_assignment, enrollment, "course_assignment_id", "enrollments", strict
    )
    course = (
        _resolve(storage.get_course, assignment, "course_id", "course_assignments", strict)
        if assignment
        else None
    )
    return {
        "student_code": student["student_id"] if student else None,
        "student_name": user["name"] if user else None,
        "course_code": course["code"] if course else None,
        "course_title": course["title"] if course else None,
    }


def attendance_report(storage, strict: bool = False) -> List[dict]:
    rows = []
    for record in storage.get_all_attendance():
        context = _enrollment_context(storage, record, "attendance", strict)
        if context is not None:
            rows.append({**record, **context})
    return rows


def grade_report(storage, strict: bool = False) -> List[dict]:
    rows = []
    for grade in storage.get_all_grades():
        context = _enrollment_context(storage, grade, "grades", strict)
        if context is not None:
            rows.append({**grade, **context})
    return rows


def course_enrollment_counts(storage) -> List[dict]:
    """Enrollment totals per course, summed over all of its assignments, in course order."""
    counts = []
    for course in storage.get_all_courses():
        student_count = sum(
            len(storage.get_enrollments_by_course_assignment(assignment["id"]))
            for assignment in storage.get_course_assignments_by_course(course["id"])
        )
        counts.append(
            {
                "id": course["id"],
                "code": course["code"],
                "title": course["title"],
                "student_count": student_count,
            }
        )
    return counts


def course_report(storage) -> List[dict]:
    totals = {row["id"]: row["student_count"] for row in course_enrollment_counts(storage)}
    return [{**course, "student_count": totals.get(course["id"], 0)} for course in storage.get_all_courses()]


def naive_utc(value) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def upcoming_events(storage, now: Optional[datetime] = None) -> List[dict]:
    """Events starting strictly after ``now`` (UTC), earliest first."""
    now = naive_utc(now or datetime.now(timezone.utc))
    upcoming = [event for event in storage.get_all_events() if naive_utc(event["start_date"]) > now]
    return sorted(upcoming, key=lambda event: naive_utc(event["start_date"]))
