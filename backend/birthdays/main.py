import time

import uvicorn
from fastapi import FastAPI, Request

from birthdays.api.v1 import health, hello
from birthdays.core.config import settings
from birthdays.core.db import dispose_engine, init_db
from birthdays.core.errors import StartupError
from birthdays.core.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

@app.on_event("startup")
def on_startup():
    configure_logging()
    try:
        settings.check_environment()
        init_db()
    except StartupError as e:
        logger.critical(f"startup failed: {e}")
        raise
    logger.info(f"{settings.PROJECT_NAME} ready ({settings.ENVIRONMENT})")

@app.on_event("shutdown")
def on_shutdown():
    dispose_engine()

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Method: {request.method}, URL: {request.url.path}, "
        f"Status: {response.status_code}, Duration: {duration_ms:.1f}ms"
    )
    return response

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(hello.router, prefix="/hello", tags=["hello"])

def run():
    configure_logging()
    logger.info(f"Starting server on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
