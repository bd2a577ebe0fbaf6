from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from countrycard.api.v1 import countries, weather_proxy
from countrycard.core.config import get_settings
from countrycard.core.logging_config import setup_logging

# Setup logging
logger = setup_logging(get_settings().LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Country Weather Card started")
    yield
    logger.info("🛑 Country Weather Card shutting down")


app = FastAPI(
    title="Country Weather Card",
    description="Country facts and the current weather in its capital",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(countries.router, prefix="/v1", tags=["countries"])
app.include_router(weather_proxy.router, prefix="/v1", tags=["weather"])


@app.get("/")
async def root():
    return {"status": "ok", "service": "Country Weather Card", "version": "1.0.0"}


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "Country Weather Card"}
