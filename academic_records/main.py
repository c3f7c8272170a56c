import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .app_logger import get_logger, setup_logging
from .database import create_store
from .routes import auth as auth_routes
from .routes import courses as course_routes
from .routes import dashboard as dashboard_routes
from .routes import enrollments as enrollment_routes
from .routes import events as event_routes
from .routes import people as people_routes
from .routes import records as record_routes
from .routes import users as user_routes
from .storage.base import Storage
from .storage.exceptions import ConflictError, DanglingReferenceError, MissingReferenceError


setup_logging()
logger = get_logger("main")

CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]


def create_app(store: Storage | None = None) -> FastAPI:
    """
    Build the API around one store instance.
    The store lives on ``app.state.store``; pass one in to share it or to
    start from an empty store in tests.
    """
    app = FastAPI(title="Academic Records System")
    app.state.store = store if store is not None else create_store()
    logger.info("Store ready with %d users", len(app.state.store.get_all_users()))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ConflictError)
    def conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(MissingReferenceError)
    def missing_reference_handler(request: Request, exc: MissingReferenceError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(DanglingReferenceError)
    def dangling_reference_handler(request: Request, exc: DanglingReferenceError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.get("/api/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(auth_routes.router, prefix="/api/auth", tags=["auth"])
    app.include_router(user_routes.router, prefix="/api/users", tags=["users"])
    app.include_router(people_routes.students_router, prefix="/api/students", tags=["students"])
    app.include_router(people_routes.faculty_router, prefix="/api/faculty", tags=["faculty"])
    app.include_router(course_routes.router, prefix="/api/courses", tags=["courses"])
    app.include_router(
        enrollment_routes.assignments_router, prefix="/api/course-assignments", tags=["enrollments"]
    )
    app.include_router(enrollment_routes.router, prefix="/api/enrollments", tags=["enrollments"])
    app.include_router(record_routes.attendance_router, prefix="/api/attendance", tags=["attendance"])
    app.include_router(record_routes.grades_router, prefix="/api/grades", tags=["grades"])
    app.include_router(event_routes.router, prefix="/api/events", tags=["events"])
    app.include_router(dashboard_routes.router, prefix="/api", tags=["dashboard"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
