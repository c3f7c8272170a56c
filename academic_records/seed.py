from datetime import datetime, timedelta, timezone

from .app_logger import get_logger


logger = get_logger("seed")

_AVATAR = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=100&h=100"


def seed_demo_data(store) -> None:
    """
    Populate an empty store with the development roster.
    Logins: admin / admin123, professor.smith / faculty123,
    emma.wilson / student123 (every demo student uses student123).
    """
    admin = store.create_user(
        {
            "username": "admin",
            "password": "admin123",
            "email": "admin@college.edu",
            "role": "admin",
            "name": "John Admin",
            "profile_image": _AVATAR.format("1535713875002-d1d0cf377fde"),
        }
    )

    smith = store.create_user(
        {
            "username": "professor.smith",
            "password": "faculty123",
            "email": "smith@college.edu",
            "role": "faculty",
            "name": "Professor Smith",
            "profile_image": _AVATAR.format("1506794778202-cad84cf45f1d"),
        }
    )
    johnson = store.create_user(
        {
            "username": "professor.johnson",
            "password": "faculty123",
            "email": "johnson@college.edu",
            "role": "faculty",
            "name": "Professor Johnson",
            "profile_image": _AVATAR.format("1573497019940-1c28c88b4f3e"),
        }
    )

    student_users = [
        store.create_user(
            {
                "username": username,
                "password": "student123",
                "email": email,
                "role": "student",
                "name": name,
                "profile_image": _AVATAR.format(photo),
            }
        )
        for username, email, name, photo in [
            ("emma.wilson", "emma.wilson@college.edu", "Emma Wilson", "1494790108377-be9c29b29330"),
            ("james.rodriguez", "james.r@college.edu", "James Rodriguez", "1507003211169-0a1dd7228f2d"),
            ("sophia.chen", "sophia.c@college.edu", "Sophia Chen", "1531123897727-8f129e1688ce"),
            ("michael.johnson", "michael.j@college.edu", "Michael Johnson", "1500648767791-00dcc994a43e"),
        ]
    ]

    fac_smith = store.create_faculty(
        {
            "user_id": smith["id"],
            "faculty_id": "FAC1001",
            "department": "Computer Science",
            "position": "Professor",
            "join_date": datetime(2018, 8, 15),
            "status": "active",
        }
    )
    fac_johnson = store.create_faculty(
        {
            "user_id": johnson["id"],
            "faculty_id": "FAC1002",
            "department": "Business Administration",
            "position": "Associate Professor",
            "join_date": datetime(2016, 1, 10),
            "status": "active",
        }
    )

    profiles = [
        ("STU1001", "Computer Science", 3, "active", datetime(2020, 9, 1)),
        ("STU1002", "Business Administration", 2, "active", datetime(2021, 9, 1)),
        ("STU1003", "Electrical Engineering", 4, "on leave", datetime(2019, 9, 1)),
        ("STU1004", "Biology", 1, "inactive", datetime(2022, 9, 1)),
    ]
    students = [
        store.create_student(
            {
                "user_id": user["id"],
                "student_id": code,
                "program": program,
                "year_level": year_level,
                "status": status,
                "enrollment_date": enrolled,
            }
        )
        for user, (code, program, year_level, status, enrolled) in zip(student_users, profiles)
    ]

    courses = [
        store.create_course(
            {
                "code": code,
                "title": title,
                "description": description,
                "credits": credits,
                "department": department,
                "status": status,
            }
        )
        for code, title, description, credits, department, status in [
            ("CS101", "Introduction to Computer Science",
             "Fundamental concepts of computer science and programming", 3, "Computer Science", "active"),
            ("BA200", "Business Ethics",
             "Ethical principles and moral issues in business management", 3, "Business Administration", "active"),
            ("PSY101", "Psychology 101",
             "Introduction to the principles of psychology", 3, "Psychology", "active"),
            ("EE201", "Circuit Analysis",
             "Basic principles of electrical circuit analysis", 4, "Electrical Engineering", "pending"),
            ("BIO110", "Introduction to Biology",
             "Fundamental principles of biology", 4, "Biology", "active"),
        ]
    ]
    cs101, ba200, psy101, _, bio110 = courses

    assignments = [
        store.create_course_assignment(
            {"course_id": course["id"], "faculty_id": faculty["id"], "semester": "Fall", "year": 2023}
        )
        for course, faculty in [
            (cs101, fac_smith),
            (ba200, fac_johnson),
            (psy101, fac_smith),
            (bio110, fac_johnson),
        ]
    ]

    enrollments = [
        store.create_enrollment(
            {
                "student_id": students[s]["id"],
                "course_assignment_id": assignments[a]["id"],
                "enrollment_date": enrolled,
                "status": "enrolled",
            }
        )
        for s, a, enrolled in [
            (0, 0, datetime(2023, 8, 15)),
            (0, 1, datetime(2023, 8, 15)),
            (1, 1, datetime(2023, 8, 10)),
            (2, 0, datetime(2023, 8, 12)),
            (2, 2, datetime(2023, 8, 12)),
            (3, 3, datetime(2023, 8, 5)),
        ]
    ]

    today = datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)
    for days_ago, (idx, status, notes) in enumerate(
        [
            (0, "present", ""),
            (1, "present", ""),
            (2, "late", "Arrived 10 minutes late"),
            (3, "absent", ""),
            (4, "excused", "Doctor's appointment"),
        ],
        start=1,
    ):
        store.create_attendance(
            {
                "enrollment_id": enrollments[idx]["id"],
                "date": today - timedelta(days=days_ago),
                "status": status,
                "notes": notes,
            }
        )

    for idx, name, score, weight, graded in [
        (0, "Midterm Exam", 85, 30, datetime(2023, 10, 15)),
        (0, "Assignment 1", 92, 15, datetime(2023, 9, 20)),
        (1, "Midterm Exam", 78, 30, datetime(2023, 10, 17)),
        (2, "Midterm Exam", 88, 30, datetime(2023, 10, 17)),
    ]:
        store.create_grade(
            {
                "enrollment_id": enrollments[idx]["id"],
                "assignment_name": name,
                "score": score,
                "max_score": 100,
                "weight": weight,
                "date": graded,
            }
        )

    now = datetime.now(timezone.utc).replace(tzinfo=None, minute=0, second=0, microsecond=0)
    for title, description, offset, hours, location, kind in [
        ("Faculty Meeting", "Discussion on curriculum updates for the upcoming semester.",
         3, 2, "Admin Building, Room 302", "administrative"),
        ("Science Exhibition", "Annual science exhibition featuring student projects and innovations.",
         6, 6, "Science Complex, Main Hall", "academic"),
        ("Enrollment Deadline", "Last day for course enrollment and schedule changes.",
         10, 23, "Online", "administrative"),
    ]:
        start = now + timedelta(days=offset)
        store.create_event(
            {
                "title": title,
                "description": description,
                "start_date": start,
                "end_date": start + timedelta(hours=hours),
                "location": location,
                "type": kind,
            }
        )

    logger.info(
        "Seeded demo data: admin=%s, %d students, %d courses, %d enrollments",
        admin["username"],
        len(students),
        len(courses),
        len(enrollments),
    )
