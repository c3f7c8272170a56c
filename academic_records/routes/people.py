from fastapi import APIRouter, Depends, HTTPException

from ..auth.dependencies import get_current_user, require_admin
from ..database import get_store
from ..schemas.core import (
    FacultyCreate,
    FacultyDetails,
    FacultyOut,
    FacultyUpdate,
    MessageResponse,
    StudentCreate,
    StudentDetails,
    StudentOut,
    StudentUpdate,
)
from ..services.views import public_user
from ..storage.base import Storage

students_router = APIRouter()
faculty_router = APIRouter()


def _profile_user(store: Storage, user_id: int, role: str) -> dict:
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=400, detail="User not found")
    if user["role"] != role:
        raise HTTPException(status_code=400, detail=f"User is not {role}")
    return user


@students_router.get("", response_model=list[StudentOut])
def list_students(
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_students_with_users()


@students_router.get("/{student_pk}", response_model=StudentDetails)
def get_student(
    student_pk: int,
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    details = store.get_student_details(student_pk)
    if details is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return details


@students_router.post("", response_model=StudentOut, status_code=201)
def create_student(
    payload: StudentCreate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    user = _profile_user(store, payload.user_id, "student")
    student = store.create_student(payload.model_dump())
    return {**student, "user": public_user(user)}


@students_router.put("/{student_pk}", response_model=StudentOut)
def update_student(
    student_pk: int,
    payload: StudentUpdate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    student = store.update_student(student_pk, payload.model_dump(exclude_unset=True))
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return {**student, "user": public_user(store.get_user(student["user_id"]))}


@students_router.delete("/{student_pk}", response_model=MessageResponse)
def delete_student(
    student_pk: int,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    if not store.delete_student(student_pk):
        raise HTTPException(status_code=404, detail="Student not found")
    return MessageResponse(message="Student deleted successfully")


@faculty_router.get("", response_model=list[FacultyOut])
def list_faculty(
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_faculty_with_users()


@faculty_router.get("/{faculty_pk}", response_model=FacultyDetails)
def get_faculty(
    faculty_pk: int,
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    details = store.get_faculty_details(faculty_pk)
    if details is None:
        raise HTTPException(status_code=404, detail="Faculty member not found")
    return details


@faculty_router.post("", response_model=FacultyOut, status_code=201)
def create_faculty(
    payload: FacultyCreate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    user = _profile_user(store, payload.user_id, "faculty")
    faculty = store.create_faculty(payload.model_dump())
    return {**faculty, "user": public_user(user)}


@faculty_router.put("/{faculty_pk}", response_model=FacultyOut)
def update_faculty(
    faculty_pk: int,
    payload: FacultyUpdate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    faculty = store.update_faculty(faculty_pk, payload.model_dump(exclude_unset=True))
    if faculty is None:
        raise HTTPException(status_code=404, detail="Faculty member not found")
    return {**faculty, "user": public_user(store.get_user(faculty["user_id"]))}


@faculty_router.delete("/{faculty_pk}", response_model=MessageResponse)
def delete_faculty(
    faculty_pk: int,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    if not store.delete_faculty(faculty_pk):
        raise HTTPException(status_code=404, detail="Faculty member not found")
    return MessageResponse(message="Faculty member deleted successfully")
