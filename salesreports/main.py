import logging
import os
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from dotenv import load_dotenv

load_dotenv()

from salesreports.routes import (
    reports_router,
    admin_reports_router,
    photos_router,
    regions_router,
    directors_router,
    rep_firms_router,
    customers_router,
    consolidated_router,
    summaries_router,
)
from salesreports.database import init_db, DATABASE_URL
from salesreports.errors import ReportingError

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Sales Reports",
    description="Monthly regional field reports",
    version="1.0.0"
)

# Uploaded photos are served straight from disk
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR), name="uploads")

# Include routers
app.include_router(reports_router)
app.include_router(admin_reports_router)
app.include_router(photos_router)
app.include_router(regions_router)
app.include_router(directors_router)
app.include_router(rep_firms_router)
app.include_router(customers_router)
app.include_router(consolidated_router)
app.include_router(summaries_router)


@app.on_event("startup")
def on_startup():
    """Ensure DB is reachable and initialized at startup. Tables are created
    automatically for SQLite dev databases. If initialization fails the app
    will raise and stop with a clear error message.
    """
    try:
        init_db()
    except Exception as e:
        # Re-raise as RuntimeError so the server fails loudly
        raise RuntimeError(
            f"Database initialization failed for DATABASE_URL={DATABASE_URL}: {e}"
        ) from e


# Error handlers
@app.exception_handler(ReportingError)
async def reporting_error_handler(request: Request, exc: ReportingError):
    """Service errors become {"error": message} with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("salesreports.main:app", host="0.0.0.0", port=8000, reload=True)
