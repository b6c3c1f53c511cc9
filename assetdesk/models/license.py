from datetime import datetime, timezone, date
from sqlalchemy import String, Integer, DateTime, Date
from sqlalchemy.orm import Mapped, mapped_column
from assetdesk.config import settings
from assetdesk.database import Base
from assetdesk.services import dates


class License(Base):
    __tablename__ = "licenses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    referenceid: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    software_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    software_version: Mapped[str | None] = mapped_column(String(64), nullable=True)
    total_purchased: Mapped[int | None] = mapped_column(Integer, nullable=True)
    managed_installation: Mapped[int | None] = mapped_column(Integer, nullable=True)
    remaining: Mapped[int | None] = mapped_column(Integer, nullable=True)
    compliance_status: Mapped[str | None] = mapped_column(String(64), nullable=True)
    action: Mapped[str | None] = mapped_column(String(255), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
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

    @property
    def asset_age(self) -> str | None:
        return dates.asset_age(self.purchase_date, dates.local_today(settings.APP_TIMEZONE))
