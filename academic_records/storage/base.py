"""Storage contract for the academic records service.

A backend implements the seven table primitives (``_get``, ``_all``,
``_insert``, ``_update``, ``_delete``, ``_find_one``, ``_find_all``). Every
per-entity repository operation, every composite view and the dashboard
statistics are written once here against those primitives, so another backend
only has to satisfy the primitives.

Absence is never an error: getters return ``None``, updates of a missing row
return ``None`` and deletes of a missing row return ``False``.
"""
import abc
from datetime import datetime
from typing import Any, List, Mapping, Optional

from ..auth.security import get_password_hash, verify_password
from ..models import core as tables
from ..services import dashboard, views


class Storage(abc.ABC):
    # Table primitives

    @abc.abstractmethod
    def _get(self, table: str, row_id: int) -> Optional[dict]:
        ...

    @abc.abstractmethod
    def _all(self, table: str) -> List[dict]:
        ...

    @abc.abstractmethod
    def _insert(self, table: str, data: Mapping[str, Any]) -> dict:
        ...

    @abc.abstractmethod
    def _update(self, table: str, row_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        ...

    @abc.abstractmethod
    def _delete(self, table: str, row_id: int) -> bool:
        ...

    @abc.abstractmethod
    def _find_one(self, table: str, column: str, value: Any) -> Optional[dict]:
        ...

    @abc.abstractmethod
    def _find_all(self, table: str, column: str, value: Any) -> List[dict]:
        ...

    # Users

    def get_user(self, user_id: int) -> Optional[dict]:
        return self._get(tables.USERS.name, user_id)

    def get_user_by_username(self, username: str) -> Optional[dict]:
        return self._find_one(tables.USERS.name, "username", username)

    def get_user_by_credentials(self, credentials: Mapping[str, str]) -> Optional[dict]:
        """Return the user matching ``username`` (any case) and ``password``."""
        user = self.get_user_by_username(credentials["username"])
        if not user or not verify_password(credentials["password"], user.get("hashed_password", "")):
            return None
        return user

    def create_user(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.USERS.name, _hash_password_field(data))

    def update_user(self, user_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.USERS.name, user_id, _hash_password_field(partial))

    def delete_user(self, user_id: int) -> bool:
        return self._delete(tables.USERS.name, user_id)

    def get_all_users(self) -> List[dict]:
        return self._all(tables.USERS.name)

    # Students

    def get_student(self, student_pk: int) -> Optional[dict]:
        return self._get(tables.STUDENTS.name, student_pk)

    def get_student_by_student_id(self, student_id: str) -> Optional[dict]:
        return self._find_one(tables.STUDENTS.name, "student_id", student_id)

    def get_student_by_user_id(self, user_id: int) -> Optional[dict]:
        return self._find_one(tables.STUDENTS.name, "user_id", user_id)

    def create_student(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.STUDENTS.name, data)

    def update_student(self, student_pk: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.STUDENTS.name, student_pk, partial)

    def delete_student(self, student_pk: int) -> bool:
        return self._delete(tables.STUDENTS.name, student_pk)

    def get_all_students(self) -> List[dict]:
        return self._all(tables.STUDENTS.name)

    # Faculty

    def get_faculty(self, faculty_pk: int) -> Optional[dict]:
        return self._get(tables.FACULTY.name, faculty_pk)

    def get_faculty_by_faculty_id(self, faculty_id: str) -> Optional[dict]:
        return self._find_one(tables.FACULTY.name, "faculty_id", faculty_id)

    def get_faculty_by_user_id(self, user_id: int) -> Optional[dict]:
        return self._find_one(tables.FACULTY.name, "user_id", user_id)

    def create_faculty(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.FACULTY.name, data)

    def update_faculty(self, faculty_pk: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.FACULTY.name, faculty_pk, partial)

    def delete_faculty(self, faculty_pk: int) -> bool:
        return self._delete(tables.FACULTY.name, faculty_pk)

    def get_all_faculty(self) -> List[dict]:
        return self._all(tables.FACULTY.name)

    # Courses

    def get_course(self, course_id: int) -> Optional[dict]:
        return self._get(tables.COURSES.name, course_id)

    def get_course_by_code(self, code: str) -> Optional[dict]:
        return self._find_one(tables.COURSES.name, "code", code)

    def create_course(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.COURSES.name, data)

    def update_course(self, course_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.COURSES.name, course_id, partial)

    def delete_course(self, course_id: int) -> bool:
        return self._delete(tables.COURSES.name, course_id)

    def get_all_courses(self) -> List[dict]:
        return self._all(tables.COURSES.name)

    # Course assignments

    def get_course_assignment(self, assignment_id: int) -> Optional[dict]:
        return self._get(tables.COURSE_ASSIGNMENTS.name, assignment_id)

    def create_course_assignment(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.COURSE_ASSIGNMENTS.name, data)

    def update_course_assignment(self, assignment_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.COURSE_ASSIGNMENTS.name, assignment_id, partial)

    def delete_course_assignment(self, assignment_id: int) -> bool:
        return self._delete(tables.COURSE_ASSIGNMENTS.name, assignment_id)

    def get_all_course_assignments(self) -> List[dict]:
        return self._all(tables.COURSE_ASSIGNMENTS.name)

    def get_course_assignments_by_course(self, course_id: int) -> List[dict]:
        return self._find_all(tables.COURSE_ASSIGNMENTS.name, "course_id", course_id)

    def get_course_assignments_by_faculty(self, faculty_pk: int) -> List[dict]:
        return self._find_all(tables.COURSE_ASSIGNMENTS.name, "faculty_id", faculty_pk)

    # Enrollments

    def get_enrollment(self, enrollment_id: int) -> Optional[dict]:
        return self._get(tables.ENROLLMENTS.name, enrollment_id)

    def create_enrollment(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.ENROLLMENTS.name, data)

    def update_enrollment(self, enrollment_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.ENROLLMENTS.name, enrollment_id, partial)

    def delete_enrollment(self, enrollment_id: int) -> bool:
        return self._delete(tables.ENROLLMENTS.name, enrollment_id)

    def get_all_enrollments(self) -> List[dict]:
        return self._all(tables.ENROLLMENTS.name)

    def get_enrollments_by_student(self, student_pk: int) -> List[dict]:
        return self._find_all(tables.ENROLLMENTS.name, "student_id", student_pk)

    def get_enrollments_by_course_assignment(self, assignment_id: int) -> List[dict]:
        return self._find_all(tables.ENROLLMENTS.name, "course_assignment_id", assignment_id)

    # Attendance

    def get_attendance(self, attendance_id: int) -> Optional[dict]:
        return self._get(tables.ATTENDANCE.name, attendance_id)

    def create_attendance(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.ATTENDANCE.name, data)

    def update_attendance(self, attendance_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.ATTENDANCE.name, attendance_id, partial)

    def delete_attendance(self, attendance_id: int) -> bool:
        return self._delete(tables.ATTENDANCE.name, attendance_id)

    def get_all_attendance(self) -> List[dict]:
        return self._all(tables.ATTENDANCE.name)

    def get_attendance_by_enrollment(self, enrollment_id: int) -> List[dict]:
        return self._find_all(tables.ATTENDANCE.name, "enrollment_id", enrollment_id)

    # Grades

    def get_grade(self, grade_id: int) -> Optional[dict]:
        return self._get(tables.GRADES.name, grade_id)

    def create_grade(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.GRADES.name, data)

    def update_grade(self, grade_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.GRADES.name, grade_id, partial)

    def delete_grade(self, grade_id: int) -> bool:
        return self._delete(tables.GRADES.name, grade_id)

    def get_all_grades(self) -> List[dict]:
        return self._all(tables.GRADES.name)

    def get_grades_by_enrollment(self, enrollment_id: int) -> List[dict]:
        return self._find_all(tables.GRADES.name, "enrollment_id", enrollment_id)

    # Events

    def get_event(self, event_id: int) -> Optional[dict]:
        return self._get(tables.EVENTS.name, event_id)

    def create_event(self, data: Mapping[str, Any]) -> dict:
        return self._insert(tables.EVENTS.name, data)

    def update_event(self, event_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        return self._update(tables.EVENTS.name, event_id, partial)

    def delete_event(self, event_id: int) -> bool:
        return self._delete(tables.EVENTS.name, event_id)

    def get_all_events(self) -> List[dict]:
        return self._all(tables.EVENTS.name)

    def get_upcoming_events(self, now: Optional[datetime] = None) -> List[dict]:
        return views.upcoming_events(self, now=now)

    # Composite views

    def get_student_details(self, student_pk: int, strict: bool = False) -> Optional[dict]:
        return views.student_details(self, student_pk, strict=strict)

    def get_course_details(self, course_id: int, strict: bool = False) -> Optional[dict]:
        return views.course_details(self, course_id, strict=strict)

    def get_faculty_details(self, faculty_pk: int, strict: bool = False) -> Optional[dict]:
        return views.faculty_details(self, faculty_pk, strict=strict)

    def get_students_with_users(self) -> List[dict]:
        return views.profiles_with_users(self, self.get_all_students())

    def get_faculty_with_users(self) -> List[dict]:
        return views.profiles_with_users(self, self.get_all_faculty())

    def get_attendance_report(self, strict: bool = False) -> List[dict]:
        return views.attendance_report(self, strict=strict)

    def get_grade_report(self, strict: bool = False) -> List[dict]:
        return views.grade_report(self, strict=strict)

    def get_course_report(self) -> List[dict]:
        return views.course_report(self)

    def get_dashboard_stats(self) -> dict:
        return dashboard.dashboard_stats(self)


def _hash_password_field(data: Mapping[str, Any]) -> dict:
    data = dict(data)
    if data.get("password") is not None:
        data["hashed_password"] = get_password_hash(data.pop("password"))
    else:
        data.pop("password", None)
    return data
