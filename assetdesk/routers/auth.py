import logging
import time
from collections import defaultdict

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from assetdesk.database import get_db
from assetdesk.models.user import User
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.user import UserRegister, LoginRequest, UserResponse, ActivityLogResponse
import assetdesk.services.user_service as svc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

ADMIN_ROLES = {"admin", "superadmin"}

# ── Rate limiting (in-memory, per IP) ──────────────────────────────────────
_login_attempts: dict[str, list[float]] = defaultdict(list)
_RATE_LIMIT_WINDOW = 60   # seconds
_RATE_LIMIT_MAX = 10      # max attempts per window


def _check_rate_limit(ip: str) -> bool:
    now = time.time()
    _login_attempts[ip] = [t for t in _login_attempts[ip] if now - t < _RATE_LIMIT_WINDOW]
    if len(_login_attempts[ip]) >= _RATE_LIMIT_MAX:
        return False
    _login_attempts[ip].append(now)
    return True


def _reset_rate_limit(ip: str) -> None:
    """Clear failed attempts after successful login."""
    _login_attempts.pop(ip, None)


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


# ── Dependencies ───────────────────────────────────────────────────────────
def require_session_user(request: Request) -> None:
    """Light session-only check for API mutation routes."""
    if not request.session.get("user_id"):
        raise HTTPException(status_code=401, detail="Login required")


def require_session_admin(request: Request) -> None:
    if not request.session.get("user_id"):
        raise HTTPException(status_code=401, detail="Login required")
    if request.session.get("role") not in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="Administrators only")


def current_user(request: Request, db: Session = Depends(get_db)) -> User:
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Login required")
    user = db.get(User, user_id)
    if not user or not user.is_active:
        request.session.clear()
        raise HTTPException(status_code=401, detail="Login required")
    return user


# ── Routes ─────────────────────────────────────────────────────────────────
@router.post("/register", response_model=DataResponse[UserResponse], status_code=201)
def register(data: UserRegister, request: Request, db: Session = Depends(get_db)):
    user = svc.register_user(db, data)
    logger.info(f"AUDIT: registered '{user.email}' (role={user.role}) from IP {_client_ip(request)}")
    return {"data": user}


@router.post("/login", response_model=DataResponse[UserResponse])
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    ip = _client_ip(request)
    if not _check_rate_limit(ip):
        raise HTTPException(status_code=429, detail="Too many attempts, try again shortly")
    user = svc.authenticate(db, data.email, data.password)
    if not user:
        logger.warning(f"AUDIT: failed login for '{data.email}' from IP {ip}")
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        logger.warning(f"AUDIT: login attempt on deactivated account '{data.email}' from IP {ip}")
        raise HTTPException(status_code=403, detail="Account is deactivated")
    _reset_rate_limit(ip)
    svc.log_activity(db, user, "login", device_id=data.device_id, ip_address=ip)
    logger.info(f"AUDIT: login '{user.email}' (role={user.role}) from IP {ip}")
    request.session["user_id"] = user.id
    request.session["email"] = user.email
    request.session["role"] = user.role
    request.session["reference_id"] = user.reference_id
    request.session["device_id"] = data.device_id
    return {"data": user}


@router.post("/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    user_id = request.session.get("user_id")
    if user_id:
        user = db.get(User, user_id)
        if user:
            svc.log_activity(db, user, "logout", device_id=request.session.get("device_id"),
                             ip_address=_client_ip(request))
            logger.info(f"AUDIT: logout '{user.email}' from IP {_client_ip(request)}")
    request.session.clear()
    return {"data": {"success": True}}


@router.get("/me", response_model=DataResponse[UserResponse])
def me(user: User = Depends(current_user)):
    return {"data": user}


@router.get("/logs", response_model=DataResponse[list[ActivityLogResponse]])
def activity_logs(
    reference_id: str | None = None,
    limit: int = 100,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
):
    # non-admins only see their own trail
    if user.role not in ADMIN_ROLES:
        reference_id = user.reference_id
    return {"data": svc.get_activity_logs(db, reference_id, limit)}
