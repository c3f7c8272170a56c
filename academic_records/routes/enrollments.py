from fastapi import APIRouter, Depends, HTTPException

from ..auth.dependencies import get_current_user, require_admin, require_staff
from ..database import get_store
from ..schemas.core import (
    CourseAssignmentCreate,
    CourseAssignmentOut,
    EnrollmentCreate,
    EnrollmentOut,
    EnrollmentUpdate,
    MessageResponse,
)
from ..storage.base import Storage

assignments_router = APIRouter()
router = APIRouter()


@assignments_router.get("", response_model=list[CourseAssignmentOut])
def list_course_assignments(
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_all_course_assignments()


@assignments_router.post("", response_model=CourseAssignmentOut, status_code=201)
def create_course_assignment(
    payload: CourseAssignmentCreate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    return store.create_course_assignment(payload.model_dump())


@assignments_router.delete("/{assignment_id}", response_model=MessageResponse)
def delete_course_assignment(
    assignment_id: int,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    if not store.delete_course_assignment(assignment_id):
        raise HTTPException(status_code=404, detail="Course assignment not found")
    return MessageResponse(message="Course assignment deleted successfully")


@router.get("", response_model=list[EnrollmentOut])
def list_enrollments(
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    return store.get_all_enrollments()


@router.post("", response_model=EnrollmentOut, status_code=201)
def create_enrollment(
    payload: EnrollmentCreate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    already_enrolled = any(
        e["course_assignment_id"] == payload.course_assignment_id and e["status"] == "enrolled"
        for e in store.get_enrollments_by_student(payload.student_id)
    )
    if already_enrolled:
        raise HTTPException(status_code=400, detail="Student is already enrolled in this course")
    return store.create_enrollment(payload.model_dump())


@router.put("/{enrollment_id}", response_model=EnrollmentOut)
def update_enrollment(
    enrollment_id: int,
    payload: EnrollmentUpdate,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    enrollment = store.update_enrollment(enrollment_id, payload.model_dump(exclude_unset=True))
    if enrollment is None:
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return enrollment


@router.delete("/{enrollment_id}", response_model=MessageResponse)
def delete_enrollment(
    enrollment_id: int,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    if not store.delete_enrollment(enrollment_id):
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return MessageResponse(message="Enrollment deleted successfully")
