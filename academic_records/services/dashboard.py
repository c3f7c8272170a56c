from decimal import ROUND_HALF_UP, Decimal
from typing import get_args

from ..models.core import ATTENDED_STATUSES
from ..schemas.core import CourseStatus
from .views import course_enrollment_counts


POPULAR_COURSE_LIMIT = 3


def _round1(value: float) -> float:
    # Half-up on the exact binary value, so 0.25 -> 0.3 rather than banker's 0.2.
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _percentage(part: int, whole: int) -> float:
    return _round1(part / whole * 100) if whole else 0.0


def dashboard_stats(storage) -> dict:
    """Headline counts, course status breakdown, attendance rate and top courses."""
    courses = storage.get_all_courses()
    attendance = storage.get_all_attendance()
    total_courses = len(courses)

    attended = sum(1 for record in attendance if record.get("status") in ATTENDED_STATUSES)

    course_statistics = {}
    for status in get_args(CourseStatus):
        count = sum(1 for course in courses if course.get("status") == status)
        course_statistics[status] = {"count": count, "percentage": _percentage(count, total_courses)}

    # sorted() is stable, so ties keep course insertion order
    popular = sorted(
        course_enrollment_counts(storage),
        key=lambda course: course["student_count"],
        reverse=True,
    )[:POPULAR_COURSE_LIMIT]

    return {
        "total_students": len(storage.get_all_students()),
        "total_faculty": len(storage.get_all_faculty()),
        "total_courses": total_courses,
        "active_courses": course_statistics["active"]["count"],
        "attendance_rate": _percentage(attended, len(attendance)),
        "course_statistics": course_statistics,
        "popular_courses": popular,
    }
