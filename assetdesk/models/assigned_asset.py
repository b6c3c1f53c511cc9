from datetime import datetime, timezone
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from assetdesk.database import Base


class AssignedAsset(Base):
    """One deployed item; rows of one deployment share an assigned_number."""

    __tablename__ = "assigned_assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    assigned_number: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    referenceid: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    inventory_id: Mapped[int | None] = mapped_column(
        ForeignKey("inventory.id", ondelete="SET NULL"), nullable=True, index=True
    )
    asset_tag: Mapped[str | None] = mapped_column(String(32), nullable=True)
    asset_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(128), nullable=True)
    model: Mapped[str | None] = mapped_column(String(128), nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(128), nullable=True)
    remarks: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    new_user: Mapped[str] = mapped_column(String(255), nullable=False)
    old_user: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="DEPLOYED", nullable=False)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    inventory_item: Mapped["InventoryItem | None"] = relationship(back_populates="assignments")
