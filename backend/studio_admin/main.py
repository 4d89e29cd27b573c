import logging

from fastapi import FastAPI

from .config import settings
from .redis_client import redis_client
from .routers import opening_hours, settings as settings_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Studio Admin API")

app.include_router(settings_router.router)
app.include_router(opening_hours.router)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "redis": redis_client.ping() if redis_client is not None else "disabled",
    }
