import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.api.v1 import boards, tasks
from taskboard.config import settings
from taskboard.database import init_db
from taskboard.errors import TaskBoardError
from taskboard.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
    yield


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TaskBoardError)
    async def taskboard_error_handler(request: Request, exc: TaskBoardError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    app.include_router(boards.router, prefix=f"{settings.API_PREFIX}/boards", tags=["boards"])
    app.include_router(tasks.router, prefix=f"{settings.API_PREFIX}/tasks", tags=["tasks"])
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("taskboard.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
