from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from farewatch import __version__
from farewatch.api import fares, health
from farewatch.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting farewatch {__version__} ({settings.env})")
    yield
    logger.info("Shutting down farewatch")


app = FastAPI(title="farewatch", version=__version__, lifespan=lifespan)

app.include_router(health.router, tags=["health"])
app.include_router(fares.router, tags=["fares"])
