from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from app.api.me import router as me_router
from app.api.onboarding.onboarding import router as onboarding_router
from app.api.trainer import router as trainer_router
from app.config.settings import settings
from app.core.logger import setup_logger
from app.db.models import Base
from app.db.session import get_engine
from app.trainer.dependencies import build_generation_dependencies

setup_logger(level=settings.log_level, log_file=settings.log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the shared generation dependencies; close them on shutdown."""
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=get_engine())

    app.state.generation_deps = build_generation_dependencies(settings)
    try:
        yield
    finally:
        await app.state.generation_deps.aclose()


app = FastAPI(title="Longevity Coach", lifespan=lifespan)

app.include_router(me_router)
app.include_router(onboarding_router)
app.include_router(trainer_router)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "healthy"}
