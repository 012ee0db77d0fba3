from contextlib import asynccontextmanager

from fastapi import FastAPI
from app.core.config import settings
from app.core.database import init_db
from app.core.handlers import register_exception_handlers
from app.core.logging import logger
from app.api.router import web_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.APP_VERSION}")
    init_db()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

register_exception_handlers(app)

# Include page routes
app.include_router(web_router)


@app.get("/")
def root():
    """
    Health check endpoint
    """
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "students": "/Students",
        "version": settings.APP_VERSION
    }
