import logging
from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException
from passlib.context import CryptContext
from assetdesk.models.user import User, ActivityLog
from assetdesk.schemas.user import UserRegister

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email.lower()))


def register_user(db: Session, data: UserRegister) -> User:
    if get_user_by_email(db, data.email):
        raise HTTPException(status_code=409, detail="Email already registered")
    if db.scalar(select(User.id).where(User.reference_id == data.reference_id)):
        raise HTTPException(status_code=409, detail="Reference ID already registered")
    user = User(
        email=data.email.lower(),
        hashed_password=hash_password(data.password),
        role=data.role,
        firstname=data.firstname,
        lastname=data.lastname,
        reference_id=data.reference_id,
        profile_picture=data.profile_picture,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def log_activity(
    db: Session,
    user: User,
    status: str,
    device_id: str | None = None,
    ip_address: str | None = None,
) -> ActivityLog:
    entry = ActivityLog(
        user_id=user.id,
        email=user.email,
        reference_id=user.reference_id,
        status=status,
        device_id=device_id,
        ip_address=ip_address,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_activity_logs(db: Session, reference_id: str | None = None, limit: int = 100) -> list[ActivityLog]:
    query = select(ActivityLog)
    if reference_id:
        query = query.where(ActivityLog.reference_id == reference_id)
    return db.scalars(query.order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc()).limit(limit)).all()


def get_directory(db: Session) -> list[User]:
    users = db.scalars(select(User).order_by(User.lastname, User.firstname)).all()
    if not users:
        raise HTTPException(status_code=404, detail="No users found")
    return users


def get_transfer_targets(db: Session, reference_id: str) -> list[User]:
    """Active users an account owner can hand accounts over to."""
    return db.scalars(
        select(User)
        .where(User.is_active.is_(True), User.reference_id != reference_id)
        .order_by(User.lastname, User.firstname)
    ).all()
