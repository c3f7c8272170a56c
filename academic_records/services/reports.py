import io
from datetime import date, datetime
from typing import Callable, Dict, List, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font


Column = Tuple[str, str]

ATTENDANCE_COLUMNS: List[Column] = [
    ("Date", "date"),
    ("Student ID", "student_code"),
    ("Student Name", "student_name"),
    ("Course", "course_title"),
    ("Status", "status"),
    ("Notes", "notes"),
]

GRADE_COLUMNS: List[Column] = [
    ("Student ID", "student_code"),
    ("Student Name", "student_name"),
    ("Course", "course_title"),
    ("Assignment", "assignment_name"),
    ("Score", "score"),
    ("Max Score", "max_score"),
    ("Weight", "weight"),
    ("Date", "date"),
]

COURSE_COLUMNS: List[Column] = [
    ("Code", "code"),
    ("Title", "title"),
    ("Department", "department"),
    ("Credits", "credits"),
    ("Status", "status"),
    ("Students Enrolled", "student_count"),
]


def _cell_value(value):
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    return value


def rows_to_workbook(title: str, columns: List[Column], rows: List[dict]) -> bytes:
    """
    Render joined rows into a single-sheet workbook.
    The first row holds the column headers. Returns the xlsx bytes.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = title

    for idx, (header, _) in enumerate(columns):
        cell = ws.cell(row=1, column=idx + 1)
        cell.value = header
        cell.font = Font(bold=True)

    for row_idx, row in enumerate(rows, start=2):
        for idx, (_, key) in enumerate(columns):
            ws.cell(row=row_idx, column=idx + 1).value = _cell_value(row.get(key))

    out_buffer = io.BytesIO()
    wb.save(out_buffer)
    out_buffer.seek(0)
    return out_buffer.getvalue()


REPORTS: Dict[str, Tuple[str, List[Column], Callable]] = {
    "attendance": ("Attendance", ATTENDANCE_COLUMNS, lambda storage: storage.get_attendance_report()),
    "grades": ("Grades", GRADE_COLUMNS, lambda storage: storage.get_grade_report()),
    "courses": ("Courses", COURSE_COLUMNS, lambda storage: storage.get_course_report()),
}


def build_report(storage, kind: str) -> bytes:
    """Build the named report; raises ``KeyError`` for an unknown kind."""
    title, columns, fetch = REPORTS[kind]
    return rows_to_workbook(title, columns, fetch(storage))
