"""
FastAPI application entry point for the careers ATS backend.

- Configures logging with per-request IDs
- Initializes FastAPI with CORS
- Registers all API routers
- Disposes database connections on shutdown
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careers import database
from careers.api import (
    analytics,
    api_keys,
    applications,
    auth,
    company,
    dashboard,
    departments,
    headcount,
    interview_processes,
    job_boards,
    job_functions,
    job_templates,
    jobs,
    notifications,
    offices,
    public,
    user_logs,
    users,
)
from careers.config import settings
from careers.logging_config import RequestIDMiddleware, configure_logging

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

API_TITLE = "Careers ATS API"
API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {API_TITLE}...")
    logger.info(f"Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else 'configured'}")
    logger.info(f"Email mode: {settings.email_mode}, debug: {settings.debug}")

    yield

    logger.info(f"Shutting down {API_TITLE}...")
    await database.engine.dispose()


app = FastAPI(
    title=API_TITLE,
    description="Multi-tenant recruiting backend: jobs, approvals, job boards and analytics",
    version=API_VERSION,
    debug=settings.debug,
    lifespan=lifespan,
)

# Extra origins come from ALLOWED_ORIGINS (comma-separated)
allowed_origins = ["http://localhost:3000"]
if settings.allowed_origins:
    allowed_origins.extend(origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIDMiddleware)


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": API_TITLE,
        "version": API_VERSION,
    }


@app.get("/")
async def root():
    return {
        "message": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(offices.router, prefix="/company/offices", tags=["offices"])
app.include_router(departments.router, prefix="/company/departments", tags=["departments"])
app.include_router(company.router, prefix="/company", tags=["company"])
app.include_router(job_functions.functions_router, prefix="/job-functions", tags=["job-functions"])
app.include_router(job_functions.roles_router, prefix="/job-roles", tags=["job-roles"])
app.include_router(job_templates.router, prefix="/job-templates", tags=["job-templates"])
app.include_router(interview_processes.router, prefix="/interview-processes", tags=["interview-processes"])
app.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
app.include_router(job_boards.router, prefix="/job-boards", tags=["job-boards"])
app.include_router(headcount.router, prefix="/headcount-requests", tags=["headcount"])
app.include_router(api_keys.router, prefix="/company-api-keys", tags=["api-keys"])
app.include_router(applications.router, prefix="/job-applications", tags=["applications"])
app.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
app.include_router(dashboard.router, prefix="/admin/dashboard", tags=["dashboard"])
app.include_router(user_logs.router, prefix="/user-logs", tags=["user-logs"])
app.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
app.include_router(public.router, prefix="/public-api", tags=["public"])
