from fastapi import APIRouter, Depends, HTTPException

from ..auth.dependencies import get_current_user, require_admin
from ..database import get_store
from ..schemas.core import CourseCreate, CourseDetails, CourseOut, CourseUpdate, MessageResponse
from ..storage.base import Storage

router = APIRouter()


@router.get("", response_model=list[CourseOut])
def list_courses(
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_all_courses()


@router.get("/{course_id}", response_model=CourseDetails)
def get_course(
    course_id: int,
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    details = store.get_course_details(course_id)
    if details is None:
        raise HTTPException(status_code=404, detail="Course not found")
    return details


@router.post("", response_model=CourseOut, status_code=201)
def create_course(
    payload: CourseCreate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    return store.create_course(payload.model_dump())


@router.put("/{course_id}", response_model=CourseOut)
def update_course(
    course_id: int,
    payload: CourseUpdate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    course = store.update_course(course_id, payload.model_dump(exclude_unset=True))
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: int,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    if not store.delete_course(course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return MessageResponse(message="Course deleted successfully")
