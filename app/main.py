# /app/main.py

# --- Core FastAPI Imports ---
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core import config
from .core.exceptions import PortalError
from .db.database import create_tables

# --- Application-specific Router Imports ---
from .routers import (
    calendar_router,
    classes_router,
    dashboard_router,
    grades_router,
    professors_router,
    public_router,
    students_router,
)

# --- Logging Configuration ---
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Professor Portal API...")
    create_tables()
    yield
    logger.info("Shutting down Professor Portal API...")


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Professor Portal API",
    description="Classes, grades and the teaching calendar for professors.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Incoming request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code} for {request.method} {request.url.path}")
    return response


# --- Exception Handlers ---
@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    logger.warning(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.error(f"HTTP {exc.status_code} error on {request.url}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url}: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(professors_router.router, prefix="/api/professors", tags=["Professors"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(grades_router.router, prefix="/api/grades", tags=["Grades"])
app.include_router(calendar_router.router, prefix="/api/calendar", tags=["Calendar"])

# Unauthenticated, public-facing routes under the /public prefix
app.include_router(public_router.router, prefix="/public", tags=["Public"])


# --- Root / Health Check Endpoints ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Professor Portal API is running", "version": app.version}


@app.get("/health", tags=["Health Check"])
async def health_check():
    return {"status": "healthy", "service": "Professor Portal API", "version": app.version}
