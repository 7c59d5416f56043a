"""
FastAPI app assembly: logging, error mapping and router wiring.
"""
import logging
import os

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from staff_registry import __version__
from staff_registry.db.errors import CategoryResolutionFailure, DataAccessFailure
from staff_registry.api.records import (
    customers_router,
    employees_router,
    external_employees_router,
)

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Staff Registry Service",
    description="Records for employees, external employees and customers with circular navigation.",
    version=__version__,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False


@app.exception_handler(DataAccessFailure)
async def data_access_failure_handler(request: Request, exc: DataAccessFailure):
    logger.error("data_access_failure: path=%s operation=%s error=%s", request.url.path, exc.operation, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(CategoryResolutionFailure)
async def category_resolution_failure_handler(request: Request, exc: CategoryResolutionFailure):
    logger.warning("category_resolution_failure: path=%s %s", request.url.path, exc.to_dict())
    return JSONResponse(status_code=409, content={"detail": str(exc), "category": exc.category})


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(employees_router)
app.include_router(external_employees_router)
app.include_router(customers_router)
