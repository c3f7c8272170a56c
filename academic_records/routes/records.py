from fastapi import APIRouter, Depends, HTTPException

from ..auth.dependencies import get_current_user, require_staff
from ..database import get_store
from ..schemas.core import (
    AttendanceCreate,
    AttendanceOut,
    AttendanceReportRow,
    AttendanceUpdate,
    GradeCreate,
    GradeOut,
    GradeReportRow,
    GradeUpdate,
    MessageResponse,
)
from ..storage.base import Storage

attendance_router = APIRouter()
grades_router = APIRouter()


@attendance_router.get("", response_model=list[AttendanceReportRow])
def list_attendance(
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    return store.get_attendance_report()


@attendance_router.get("/enrollment/{enrollment_id}", response_model=list[AttendanceOut])
def list_attendance_for_enrollment(
    enrollment_id: int,
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_attendance_by_enrollment(enrollment_id)


@attendance_router.post("", response_model=AttendanceOut, status_code=201)
def create_attendance(
    payload: AttendanceCreate,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    return store.create_attendance(payload.model_dump())


@attendance_router.put("/{attendance_id}", response_model=AttendanceOut)
def update_attendance(
    attendance_id: int,
    payload: AttendanceUpdate,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    record = store.update_attendance(attendance_id, payload.model_dump(exclude_unset=True))
    if record is None:
        raise HTTPException(status_code=404, detail="Attendance record not found")
    return record


@attendance_router.delete("/{attendance_id}", response_model=MessageResponse)
def delete_attendance(
    attendance_id: int,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    if not store.delete_attendance(attendance_id):
        raise HTTPException(status_code=404, detail="Attendance record not found")
    return MessageResponse(message="Attendance record deleted successfully")


@grades_router.get("", response_model=list[GradeReportRow])
def list_grades(
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    return store.get_grade_report()


@grades_router.get("/enrollment/{enrollment_id}", response_model=list[GradeOut])
def list_grades_for_enrollment(
    enrollment_id: int,
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_grades_by_enrollment(enrollment_id)


@grades_router.post("", response_model=GradeOut, status_code=201)
def create_grade(
    payload: GradeCreate,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    if payload.score > payload.max_score:
        raise HTTPException(status_code=400, detail="Score cannot exceed max score")
    return store.create_grade(payload.model_dump())


@grades_router.put("/{grade_id}", response_model=GradeOut)
def update_grade(
    grade_id: int,
    payload: GradeUpdate,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    grade = store.get_grade(grade_id)
    if grade is None:
        raise HTTPException(status_code=404, detail="Grade not found")
    changes = payload.model_dump(exclude_unset=True)
    merged = {**grade, **changes}
    if merged["score"] > merged["max_score"]:
        raise HTTPException(status_code=400, detail="Score cannot exceed max score")
    return store.update_grade(grade_id, changes)


@grades_router.delete("/{grade_id}", response_model=MessageResponse)
def delete_grade(
    grade_id: int,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    if not store.delete_grade(grade_id):
        raise HTTPException(status_code=404, detail="Grade not found")
    return MessageResponse(message="Grade deleted successfully")
