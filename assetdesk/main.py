from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager
import logging
import os

from assetdesk.database import engine, SessionLocal
from assetdesk.database import Base
import assetdesk.models  # noqa: F401 (registers all models)
from assetdesk.models.user import User
from assetdesk.config import settings
from assetdesk.services.user_service import hash_password
from assetdesk.routers import (
    health, auth, users, inventory, warranty, licenses, assigned_assets, accounts,
    activities, history, meetings, reminders, preferences, tickets, export, realtime,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Ensure DB exists and tables are created (for dev mode without alembic)
    os.makedirs("data", exist_ok=True)
    Base.metadata.create_all(bind=engine)

    # Create first admin user if no users exist yet
    db = SessionLocal()
    try:
        if not db.scalar(select(User.id).limit(1)):
            admin = User(
                email=settings.FIRST_ADMIN_EMAIL.lower(),
                hashed_password=hash_password(settings.FIRST_ADMIN_PASS),
                role="admin",
                firstname="System",
                lastname="Administrator",
                reference_id="ADMIN-0001",
                is_active=True,
            )
            db.add(admin)
            db.commit()
            logger.info("Created first admin user: %s", settings.FIRST_ADMIN_EMAIL)
    finally:
        db.close()

    yield


app = FastAPI(
    title="AssetDesk",
    description="IT asset management and helpdesk ticketing",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    https_only=settings.APP_ENV == "production",
    same_site="lax",
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.APP_ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)


# --- Error envelope: every failure is {"error": "..."} ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
    return JSONResponse({"error": "; ".join(messages) or "Invalid request"}, status_code=400)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=500)


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(inventory.router)
app.include_router(warranty.router)
app.include_router(licenses.router)
app.include_router(assigned_assets.router)
app.include_router(accounts.router)
app.include_router(activities.router)
app.include_router(history.router)
app.include_router(meetings.router)
app.include_router(reminders.router)
app.include_router(preferences.router)
app.include_router(tickets.router)
app.include_router(export.router)
app.include_router(realtime.router)
