"""
Agent Auditor - FastAPI Application Entry Point
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agent_auditor.config import settings
from agent_auditor.api.v1.endpoints import audit, health
from agent_auditor.logger import logger
from agent_auditor.services.audit_runner import AuditRunner
from agent_auditor.services.audit_store import AuditStore

# Create app
app = FastAPI(
    title=settings.APP_NAME,
    description="Security and GDPR audits of agent persona, orchestration, tool and config documents",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Shared services, handed to endpoints through dependencies
app.state.audit_runner = AuditRunner()
app.state.audit_store = AuditStore(max_entries=settings.AUDIT_HISTORY_LIMIT)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(audit.router, prefix="/api/v1/audit")


@app.on_event("startup")
async def startup():
    """Initialize on startup."""
    logger.info(f"Starting {settings.APP_NAME}...")


@app.on_event("shutdown")
async def shutdown():
    """Drop in-memory audits on shutdown."""
    app.state.audit_store.clear()
    logger.info(f"Stopped {settings.APP_NAME}")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs"
    }
