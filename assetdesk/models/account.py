from datetime import datetime, timezone, date
from sqlalchemy import String, DateTime, Date
from sqlalchemy.orm import Mapped, mapped_column
from assetdesk.database import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    referenceid: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    tsm: Mapped[str | None] = mapped_column(String(64), nullable=True)
    manager: Mapped[str | None] = mapped_column(String(64), nullable=True)
    account_reference_number: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    email_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    region: Mapped[str | None] = mapped_column(String(64), nullable=True)
    type_client: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    next_available_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="Active", nullable=False)
    remarks: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    date_updated: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=True,
    )
