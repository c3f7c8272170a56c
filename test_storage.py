from datetime import datetime

import pytest

from academic_records.storage.exceptions import ConflictError, MissingReferenceError


def _student(store, user, code="STU9001"):
    return store.create_student(
        {
            "user_id": user["id"],
            "student_id": code,
            "program": "Physics",
            "year_level": 1,
            "status": "active",
            "enrollment_date": datetime(2024, 9, 1),
        }
    )


def _faculty(store, user, code="FAC9001"):
    return store.create_faculty(
        {
            "user_id": user["id"],
            "faculty_id": code,
            "department": "Physics",
            "position": "Lecturer",
            "join_date": datetime(2020, 1, 1),
            "status": "active",
        }
    )


def test_ids_strictly_increase_across_deletes(store, make_course):
    ids = []
    for n in range(5):
        course = make_course(f"C{n}")
        ids.append(course["id"])
        if n % 2 == 0:
            assert store.delete_course(course["id"])
    assert ids == sorted(ids)
    assert len(set(ids)) == 5
    assert ids[0] == 1


def test_ids_are_per_table(store, make_user, make_course):
    make_course("C1")
    make_course("C2")
    user = make_user("alice")
    assert user["id"] == 1


def test_update_merges_only_supplied_fields(store, make_course):
    course = make_course("CS200", title="Algorithms")
    updated = store.update_course(course["id"], {"status": "archived"})
    assert updated["status"] == "archived"
    assert updated["title"] == "Algorithms"
    assert updated["code"] == "CS200"
    assert updated["credits"] == 3
    assert store.get_course(course["id"]) == updated


def test_update_cannot_change_identity(store, make_course):
    course = make_course("CS200")
    updated = store.update_course(course["id"], {"id": 99, "credits": 4})
    assert updated["id"] == course["id"]
    assert store.get_course(99) is None


def test_update_missing_row_returns_none(store):
    assert store.update_course(42, {"status": "active"}) is None


def test_delete_reports_existence(store, make_course):
    course = make_course("CS200")
    assert store.delete_course(course["id"]) is True
    assert store.delete_course(course["id"]) is False
    assert store.delete_course(1234) is False
    assert store.get_course(course["id"]) is None


def test_rows_are_snapshots(store, make_course):
    course = make_course("CS200")
    course["title"] = "Changed outside"
    store.get_all_courses()[0]["status"] = "archived"
    stored = store.get_course(course["id"])
    assert stored["title"] == "Course CS200"
    assert stored["status"] == "active"


def test_list_all_keeps_insertion_order(store, make_course):
    for code in ["B", "A", "C"]:
        make_course(code)
    assert [c["code"] for c in store.get_all_courses()] == ["B", "A", "C"]


def test_username_lookup_is_case_insensitive(store, make_user):
    user = make_user("Admin", role="admin")
    assert store.get_user_by_username("admin")["id"] == user["id"]
    assert store.get_user_by_username("ADMIN")["id"] == user["id"]
    assert store.get_user_by_username("nobody") is None


def test_passwords_are_stored_hashed(store, make_user):
    user = make_user("alice", password="secret123")
    assert "password" not in user
    assert user["hashed_password"] != "secret123"


def test_credentials_check(seeded_store):
    user = seeded_store.get_user_by_credentials({"username": "admin", "password": "admin123"})
    assert user is not None and user["role"] == "admin"
    assert seeded_store.get_user_by_credentials({"username": "ADMIN", "password": "admin123"})
    assert seeded_store.get_user_by_credentials({"username": "admin", "password": "Admin123"}) is None
    assert seeded_store.get_user_by_credentials({"username": "ghost", "password": "admin123"}) is None


def test_update_user_rehashes_password(store, make_user):
    user = make_user("alice", password="secret123")
    store.update_user(user["id"], {"password": "newsecret"})
    assert store.get_user_by_credentials({"username": "alice", "password": "newsecret"})
    assert store.get_user_by_credentials({"username": "alice", "password": "secret123"}) is None


def test_duplicate_username_conflicts_ignoring_case(store, make_user):
    make_user("alice")
    with pytest.raises(ConflictError) as exc:
        make_user("ALICE")
    assert exc.value.field == "username"
    assert len(store.get_all_users()) == 1


def test_duplicate_codes_conflict(store, make_user, make_course):
    make_course("CS101")
    with pytest.raises(ConflictError):
        make_course("CS101")

    user = make_user("s1")
    _student(store, user, "STU1")
    with pytest.raises(ConflictError):
        _student(store, make_user("s2"), "STU1")

    lecturer = make_user("f1", role="faculty")
    _faculty(store, lecturer, "FAC1")
    with pytest.raises(ConflictError):
        _faculty(store, make_user("f2", role="faculty"), "FAC1")


def test_one_profile_per_user(store, make_user):
    user = make_user("s1")
    _student(store, user, "STU1")
    with pytest.raises(ConflictError) as exc:
        _student(store, user, "STU2")
    assert exc.value.field == "user_id"


def test_update_into_taken_key_conflicts(store, make_course):
    make_course("CS101")
    other = make_course("CS102")
    with pytest.raises(ConflictError):
        store.update_course(other["id"], {"code": "CS101"})
    # Re-saving its own key is not a conflict
    assert store.update_course(other["id"], {"code": "CS102"})["code"] == "CS102"


def test_freed_unique_key_can_be_reused(store, make_user, make_course):
    course = make_course("CS101")
    store.delete_course(course["id"])
    assert make_course("CS101")["id"] != course["id"]

    user = make_user("alice")
    store.update_user(user["id"], {"username": "alicia"})
    assert store.get_user_by_username("alice") is None
    make_user("alice")


def test_insert_requires_existing_parent(store):
    with pytest.raises(MissingReferenceError) as exc:
        _student(store, {"id": 77})
    assert exc.value.field == "user_id"
    assert store.get_all_students() == []


def test_update_checks_changed_foreign_keys(store, make_user, make_course):
    course = make_course("CS101")
    lecturer = _faculty(store, make_user("f1", role="faculty"))
    assignment = store.create_course_assignment(
        {"course_id": course["id"], "faculty_id": lecturer["id"], "semester": "Fall", "year": 2024}
    )
    with pytest.raises(MissingReferenceError):
        store.update_course_assignment(assignment["id"], {"course_id": 999})
    assert store.update_course_assignment(assignment["id"], {"year": 2025})["year"] == 2025


def test_delete_does_not_cascade(seeded_store):
    course = seeded_store.get_course_by_code("CS101")
    assignments = seeded_store.get_course_assignments_by_course(course["id"])
    assert seeded_store.delete_course(course["id"])
    assert seeded_store.get_course_assignments_by_course(course["id"]) == assignments


def test_secondary_lookups(seeded_store):
    student = seeded_store.get_student_by_student_id("STU1001")
    assert student["program"] == "Computer Science"
    assert seeded_store.get_student_by_user_id(student["user_id"])["id"] == student["id"]
    assert seeded_store.get_student_by_student_id("STU0000") is None

    faculty = seeded_store.get_faculty_by_faculty_id("FAC1002")
    assert faculty["position"] == "Associate Professor"
    assert seeded_store.get_faculty_by_user_id(faculty["user_id"])["id"] == faculty["id"]

    assert seeded_store.get_course_by_code("BIO110")["credits"] == 4
    assert seeded_store.get_course_by_code("bio110") is None


def test_relationship_queries(seeded_store):
    smith = seeded_store.get_faculty_by_faculty_id("FAC1001")
    taught = seeded_store.get_course_assignments_by_faculty(smith["id"])
    assert [seeded_store.get_course(a["course_id"])["code"] for a in taught] == ["CS101", "PSY101"]

    emma = seeded_store.get_student_by_student_id("STU1001")
    enrollments = seeded_store.get_enrollments_by_student(emma["id"])
    assert len(enrollments) == 2

    first = enrollments[0]
    assert len(seeded_store.get_enrollments_by_course_assignment(first["course_assignment_id"])) == 2
    assert [a["status"] for a in seeded_store.get_attendance_by_enrollment(first["id"])] == ["present"]
    assert len(seeded_store.get_grades_by_enrollment(first["id"])) == 2
