from datetime import datetime, timezone, date
from decimal import Decimal
from sqlalchemy import String, DateTime, Date, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from assetdesk.database import Base


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    referenceid: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    tsm: Mapped[str] = mapped_column(String(64), nullable=False)
    manager: Mapped[str] = mapped_column(String(64), nullable=False)
    account_reference_number: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    activity_reference_number: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    date_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class History(Base):
    """Interaction recorded against an activity (call, quotation, delivery...)."""

    __tablename__ = "history"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    activity_reference_number: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    account_reference_number: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    type_activity: Mapped[str] = mapped_column(String(64), nullable=False)
    referenceid: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    tsm: Mapped[str | None] = mapped_column(String(64), nullable=True)
    manager: Mapped[str | None] = mapped_column(String(64), nullable=True)
    target_quota: Mapped[str | None] = mapped_column(String(64), nullable=True)
    type_client: Mapped[str | None] = mapped_column(String(64), nullable=True)
    source: Mapped[str | None] = mapped_column(String(128), nullable=True)
    callback: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    call_status: Mapped[str | None] = mapped_column(String(64), nullable=True)
    call_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    product_category: Mapped[str | None] = mapped_column(String(128), nullable=True)
    project_type: Mapped[str | None] = mapped_column(String(128), nullable=True)
    project_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    quotation_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    quotation_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    so_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    so_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    dr_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    actual_sales: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    payment_terms: Mapped[str | None] = mapped_column(String(128), nullable=True)
    delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_followup: Mapped[date | None] = mapped_column(Date, nullable=True)
    scheduled_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    remarks: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    date_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
