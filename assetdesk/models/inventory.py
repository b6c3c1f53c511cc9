import enum
from datetime import datetime, timezone, date
from decimal import Decimal
from sqlalchemy import String, DateTime, Date, Numeric, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from assetdesk.config import settings
from assetdesk.database import Base
from assetdesk.services import dates


class AssetType(str, enum.Enum):
    LAPTOP = "LAPTOP"
    MONITOR = "MONITOR"
    DESKTOP = "DESKTOP"


class AssetStatus(str, enum.Enum):
    SPARE = "SPARE"
    DEPLOYED = "DEPLOYED"
    LEND = "LEND"
    MISSING = "MISSING"
    DEFECTIVE = "DEFECTIVE"
    DISPOSE = "DISPOSE"


class InventoryItem(Base):
    __tablename__ = "inventory"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    referenceid: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    # NULLs do not collide; every non-null tag is unique
    asset_tag: Mapped[str | None] = mapped_column(String(32), unique=True, index=True, nullable=True)
    asset_type: Mapped[str | None] = mapped_column(
        SAEnum(AssetType, values_callable=lambda e: [x.value for x in e]),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        SAEnum(AssetStatus, values_callable=lambda e: [x.value for x in e]),
        default=AssetStatus.SPARE,
        nullable=False,
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    new_user: Mapped[str | None] = mapped_column(String(255), nullable=True)
    old_user: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(128), nullable=True)
    model: Mapped[str | None] = mapped_column(String(128), nullable=True)
    processor: Mapped[str | None] = mapped_column(String(128), nullable=True)
    ram: Mapped[str | None] = mapped_column(String(64), nullable=True)
    storage: Mapped[str | None] = mapped_column(String(64), nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(128), nullable=True)
    mac_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
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

    assignments: Mapped[list["AssignedAsset"]] = relationship(back_populates="inventory_item")

    @property
    def asset_age(self) -> str | None:
        return dates.asset_age(self.purchase_date, dates.local_today(settings.APP_TIMEZONE))
