import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from config.settings import settings
from services.schema_reconciler import SchemaReconciler
from utils.database import get_engine
from api.routes.content import router as content_router
from api.routes.users import router as users_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

DESCRIPTION = """
Content backend for the Shadows of Soldiers website.

## Content

| Endpoint | Description |
|----------|-------------|
| `GET /api/data` | Whole site content tree (news, classes, media, faq, features, privacy, terms, weapons, maps, gameDevices, gameModes, settings) |
| `POST /api/data` | Save any subset of the tree in one transaction; returns the stored tree |

## Schema

The database schema is reconciled on every start: missing tables and columns
are created, media columns widened and legacy integer ids converted to string
ids. Reconciliation problems are logged and never block startup.
"""

tags_metadata = [
    {
        "name": "Health",
        "description": "Health check endpoints.",
    },
    {
        "name": "Content",
        "description": "Read and save the site content tree.",
    },
    {
        "name": "Users",
        "description": "Admin accounts.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema must be in place before the first request is served.
    report = await run_in_threadpool(SchemaReconciler(get_engine()).run)
    if not report.ok:
        logger.warning(f"Started with {len(report.failed)} schema change(s) not applied")
    yield


app = FastAPI(
    title="SOS Content API",
    description=DESCRIPTION,
    version="1.0.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Configure CORS
ALLOWED_ORIGINS = settings.ALLOWED_ORIGINS.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoints
@app.get("/ping", tags=["Health"])
def ping():
    """Simple ping endpoint to check if API is responding."""
    return {"message": "pong"}


@app.get("/health", tags=["Health"])
def health():
    """Health check endpoint with basic status information."""
    return {
        "status": "healthy",
        "service": "SOS Content API",
        "version": "1.0.0"
    }


# Register routers
app.include_router(content_router)
app.include_router(users_router)
