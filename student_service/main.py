from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from student_service.api.v1.router import api_router
from student_service.core.config import Settings, settings as default_settings
from student_service.core.database import Database
from student_service.core.handlers import register_exception_handlers
from student_service.core.logging import setup_logging


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logger = setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Connecting to {settings.masked_database_url()}")
        database = Database(settings)
        # The store may come up after us, requests report 503 until it does
        if not database.check_connection():
            logger.warning("Database not reachable at startup")
        elif settings.DB_CREATE_TABLES:
            database.create_tables()
        app.state.database = database
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/", include_in_schema=False)
    def root():
        return {
            "message": "Welcome to Student Management API",
            "docs": "/docs",
            "version": settings.APP_VERSION
        }

    @app.get("/healthcheck")
    @app.get("/health")
    def healthcheck():
        """
        Liveness probe, does not touch the database
        """
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "student_service.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        workers=default_settings.WORKERS,
    )
