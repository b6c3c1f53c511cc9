from datetime import datetime, timezone
from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from assetdesk.database import Base


class EndorsedTicket(Base):
    __tablename__ = "endorsed_tickets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    account_reference_number: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(64), nullable=False)
    email_address: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    ticket_reference_number: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    wrap_up: Mapped[str] = mapped_column(String(255), nullable=False)
    inquiry: Mapped[str] = mapped_column(String(2000), nullable=False)
    manager: Mapped[str] = mapped_column(String(64), nullable=False)
    agent: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
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
