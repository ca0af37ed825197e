import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .events import Notifier
from .fixtures import seed_store
from .logging_setup import setup_logging
from .query import QueryView
from .routers import notifications as notifications_router
from .routers import tasks as tasks_router
from .settings import Settings, get_settings
from .store import TaskNotFoundError, TaskStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "tasks",
        "description": "Create, edit, complete, share and delete tasks; search, filter and sort the list.",
    },
    {"name": "notifications", "description": "Confirmation messages for recent task changes."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application with its own store, notifier and query cache.

    Each call returns an independent app, so tests can start from a clean
    collection.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task Dashboard Backend",
        description="In-memory task tracking service backing the task dashboard UI.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )

    store = TaskStore(Notifier(history=settings.notification_history))
    if settings.seed_fixtures:
        seed_store(store)
    app.state.settings = settings
    app.state.store = store
    app.state.query_view = QueryView()

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_errors(exc),
            },
        )

    @app.exception_handler(TaskNotFoundError)
    async def not_found_exception_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
        logger.info("Task not found id=%s path=%s", exc.task_id, request.url.path)
        return JSONResponse(status_code=404, content={"detail": "Task not found"})

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the number of tasks held.
        """
        return {"message": "Healthy", "tasks": len(store)}

    app.include_router(tasks_router.router)
    app.include_router(notifications_router.router)
    logger.info("Task dashboard backend ready tasks=%s seeded=%s", len(store), settings.seed_fixtures)
    return app


def jsonable_errors(exc: RequestValidationError) -> Any:
    # pydantic may put exception objects in "ctx"; render them as text
    return jsonable_encoder(exc.errors(), custom_encoder={Exception: str})


app = create_app()
