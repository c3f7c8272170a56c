import os

from fastapi import Request

from .storage.base import Storage
from .storage.memory import MemStorage


SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "1").lower() in ("1", "true", "yes", "on")


def create_store(seed: bool = SEED_DEMO_DATA) -> Storage:
    return MemStorage(seed=seed)


def get_store(request: Request) -> Storage:
    return request.app.state.store
