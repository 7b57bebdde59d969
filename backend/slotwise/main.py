from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slotwise.api.deps import get_workspace
from slotwise.api.routes import conflicts, courses, health, instructors, rooms, timetable, versions
from slotwise.core.config import get_settings
from slotwise.core.exceptions import AppError
from slotwise.core.logging import configure_logging
from slotwise.core.middleware import RequestSizeLimitMiddleware, RequestTimingMiddleware

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    workspace = app.dependency_overrides.get(get_workspace, get_workspace)()
    if workspace.courses and not len(workspace.history):
        regeneration = workspace.regenerate(preserve_locked=True)
        logger.info(
            "Initial schedule generated version=%s sessions=%s failures=%s",
            regeneration.version.label,
            len(regeneration.result.sessions),
            len(regeneration.result.failures),
        )
    yield


async def app_error_handler(request: Request, exc: AppError):
    logger.warning("Request failed path=%s status=%s message=%s", request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes)
app.add_middleware(RequestTimingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(courses.router, prefix=f"{settings.api_prefix}/courses", tags=["courses"])
app.include_router(instructors.router, prefix=f"{settings.api_prefix}/instructors", tags=["instructors"])
app.include_router(rooms.router, prefix=f"{settings.api_prefix}/rooms", tags=["rooms"])
app.include_router(timetable.router, prefix=f"{settings.api_prefix}/timetable", tags=["timetable"])
app.include_router(conflicts.router, prefix=f"{settings.api_prefix}/conflicts", tags=["conflicts"])
app.include_router(versions.router, prefix=f"{settings.api_prefix}/versions", tags=["versions"])
