from fastapi import APIRouter, Depends, HTTPException

from ..auth.dependencies import get_current_user, require_admin
from ..database import get_store
from ..schemas.core import EventCreate, EventOut, EventUpdate, MessageResponse
from ..services.views import naive_utc
from ..storage.base import Storage

router = APIRouter()


@router.get("", response_model=list[EventOut])
def list_events(
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_all_events()


@router.get("/upcoming", response_model=list[EventOut])
def list_upcoming_events(
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_upcoming_events()


@router.post("", response_model=EventOut, status_code=201)
def create_event(
    payload: EventCreate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    return store.create_event(payload.model_dump())


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: int,
    payload: EventUpdate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    event = store.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    changes = payload.model_dump(exclude_unset=True)
    merged = {**event, **changes}
    if naive_utc(merged["end_date"]) < naive_utc(merged["start_date"]):
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")
    return store.update_event(event_id, changes)


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    if not store.delete_event(event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return MessageResponse(message="Event deleted successfully")
