"""Application entry point for the Diet Planner API.

Defines the FastAPI app, middleware and exception handlers, and includes
the routers from the `api` package. The `lifespan` handler creates the
tables and seeds the meal catalog on startup.
"""

from contextlib import asynccontextmanager
import time

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from api.bmi import router as bmi_router
from api.diet_plans import router as diet_plans_router
from api.meals import router as meals_router
from api.tracking import router as tracking_router
from api.users import router as users_router
from core.config import settings
from core.error_handlers import register_exception_handlers
from core.exceptions import DatabaseError
from core.logger import get_logger
from database import init_db
from database.deps import get_db_read

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    logger.info("Diet Planner API started")
    yield


app = FastAPI(title="Diet Planner API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    started = time.perf_counter()
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method, request.url.path, response.status_code, (time.perf_counter() - started) * 1000,
    )
    return response


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        DatabaseError: If database connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.exception("Health check failed")
        raise DatabaseError("Database health check failed", operation="health", details={"error": str(e)})


app.include_router(users_router)
app.include_router(bmi_router)
app.include_router(meals_router)
app.include_router(diet_plans_router)
app.include_router(tracking_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
