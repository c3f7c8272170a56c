from datetime import datetime, timedelta, timezone

import pytest

from academic_records.storage.exceptions import DanglingReferenceError


def _emma(store):
    return store.get_student_by_student_id("STU1001")


def test_student_details_joins_enrollments(seeded_store):
    emma = _emma(seeded_store)
    details = seeded_store.get_student_details(emma["id"])

    assert details["student_id"] == "STU1001"
    assert details["user"]["name"] == "Emma Wilson"
    assert "hashed_password" not in details["user"]

    blocks = details["enrollments"]
    assert [b["course"]["code"] for b in blocks] == ["CS101", "BA200"]
    cs101 = blocks[0]
    assert cs101["faculty_name"] == "Professor Smith"
    assert cs101["faculty"]["faculty_id"] == "FAC1001"
    assert cs101["semester"] == "Fall"
    assert cs101["year"] == 2023
    assert [g["assignment_name"] for g in cs101["grades"]] == ["Midterm Exam", "Assignment 1"]
    assert [a["status"] for a in cs101["attendance"]] == ["present"]
    assert cs101["enrollment"]["status"] == "enrolled"


def test_student_details_not_found(seeded_store):
    assert seeded_store.get_student_details(999) is None


def test_student_details_missing_user_is_not_found(seeded_store):
    emma = _emma(seeded_store)
    seeded_store.delete_user(emma["user_id"])
    assert seeded_store.get_student_details(emma["id"]) is None
    with pytest.raises(DanglingReferenceError):
        seeded_store.get_student_details(emma["id"], strict=True)


def test_dangling_assignment_is_dropped(seeded_store):
    emma = _emma(seeded_store)
    first, second = seeded_store.get_enrollments_by_student(emma["id"])
    seeded_store.delete_course_assignment(first["course_assignment_id"])

    details = seeded_store.get_student_details(emma["id"])
    assert [b["enrollment"]["id"] for b in details["enrollments"]] == [second["id"]]
    assert details["enrollments"][0]["course"]["code"] == "BA200"


def test_strict_mode_raises_on_dangling_assignment(seeded_store):
    emma = _emma(seeded_store)
    first = seeded_store.get_enrollments_by_student(emma["id"])[0]
    seeded_store.delete_course_assignment(first["course_assignment_id"])

    with pytest.raises(DanglingReferenceError) as exc:
        seeded_store.get_student_details(emma["id"], strict=True)
    assert exc.value.table == "enrollments"
    assert exc.value.field == "course_assignment_id"


def test_dangling_course_is_reported_as_none(seeded_store):
    emma = _emma(seeded_store)
    seeded_store.delete_course(seeded_store.get_course_by_code("CS101")["id"])

    blocks = seeded_store.get_student_details(emma["id"])["enrollments"]
    assert len(blocks) == 2
    assert blocks[0]["course"] is None
    assert blocks[0]["faculty_name"] == "Professor Smith"


def test_course_details_lists_faculty(seeded_store):
    cs101 = seeded_store.get_course_by_code("CS101")
    details = seeded_store.get_course_details(cs101["id"])
    assert details["title"] == "Introduction to Computer Science"
    assert [a["faculty_name"] for a in details["assignments"]] == ["Professor Smith"]

    seeded_store.delete_faculty(details["assignments"][0]["faculty_id"])
    assignment = seeded_store.get_course_details(cs101["id"])["assignments"][0]
    assert assignment["faculty"] is None
    assert assignment["faculty_name"] is None
    assert seeded_store.get_course_details(12345) is None


def test_faculty_details_lists_courses(seeded_store):
    johnson = seeded_store.get_faculty_by_faculty_id("FAC1002")
    details = seeded_store.get_faculty_details(johnson["id"])
    assert details["user"]["name"] == "Professor Johnson"
    assert [c["course"]["code"] for c in details["courses"]] == ["BA200", "BIO110"]


def test_profiles_with_users(seeded_store):
    rows = seeded_store.get_students_with_users()
    assert [r["user"]["username"] for r in rows] == [
        "emma.wilson",
        "james.rodriguez",
        "sophia.chen",
        "michael.johnson",
    ]
    seeded_store.delete_user(rows[0]["user_id"])
    assert seeded_store.get_students_with_users()[0]["user"] is None
    assert len(seeded_store.get_faculty_with_users()) == 2


def test_attendance_report_joins_student_and_course(seeded_store):
    rows = seeded_store.get_attendance_report()
    assert len(rows) == 5
    first = rows[0]
    assert first["student_code"] == "STU1001"
    assert first["student_name"] == "Emma Wilson"
    assert first["course_code"] == "CS101"
    assert first["status"] == "present"


def test_reports_skip_rows_with_missing_enrollment(seeded_store):
    enrollment_id = seeded_store.get_all_attendance()[0]["enrollment_id"]
    seeded_store.delete_enrollment(enrollment_id)
    assert len(seeded_store.get_attendance_report()) == 4
    assert len(seeded_store.get_grade_report()) == 2
    with pytest.raises(DanglingReferenceError):
        seeded_store.get_grade_report(strict=True)


def test_course_report_counts_students(seeded_store):
    counts = {row["code"]: row["student_count"] for row in seeded_store.get_course_report()}
    assert counts == {"CS101": 2, "BA200": 2, "PSY101": 1, "EE201": 0, "BIO110": 1}


def _event(store, title, start):
    return store.create_event(
        {
            "title": title,
            "start_date": start,
            "end_date": start + timedelta(hours=1),
            "type": "academic",
        }
    )


def test_upcoming_events_filters_and_sorts(store):
    now = datetime(2024, 5, 1, 12, 0)
    _event(store, "later", now + timedelta(days=5))
    _event(store, "past", now - timedelta(days=1))
    _event(store, "soon", now + timedelta(hours=2))
    _event(store, "exactly now", now)

    titles = [e["title"] for e in store.get_upcoming_events(now=now)]
    assert titles == ["soon", "later"]


def test_upcoming_events_mixes_aware_and_naive(store):
    now = datetime(2024, 5, 1, 12, 0)
    _event(store, "aware", datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=1))))
    _event(store, "naive", datetime(2024, 5, 1, 12, 30))
    assert [e["title"] for e in store.get_upcoming_events(now=now)] == ["naive", "aware"]


def test_seeded_events_are_upcoming(seeded_store):
    assert [e["title"] for e in seeded_store.get_upcoming_events()] == [
        "Faculty Meeting",
        "Science Exhibition",
        "Enrollment Deadline",
    ]


def test_views_tolerate_user_with_no_profiles(store, make_user):
    make_user("lonely")
    assert store.get_students_with_users() == []
    assert store.get_student_details(1) is None
