from sqlalchemy import String, Integer, Float, ForeignKey, Enum, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .enums import ItemType, Frequency


class RecurringItem(Base, TimestampMixin):
    """
    Income or expense that repeats on a fixed month interval.

    Produces at most one occurrence per month between start_date and
    end_date (inclusive). Individual months can be changed or skipped
    through override rows in planned_items.
    """

    __tablename__ = "recurring_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False, index=True
    )

    type: Mapped[ItemType] = mapped_column(Enum(ItemType), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Frequency
    frequency: Mapped[Frequency] = mapped_column(
        Enum(Frequency), nullable=False, default=Frequency.MONTHLY
    )
    custom_interval_months: Mapped[int | None] = mapped_column(Integer, nullable=True)  # For CUSTOM

    # Date range (YYYY-MM)
    start_date: Mapped[str] = mapped_column(String(7), nullable=False)
    end_date: Mapped[str | None] = mapped_column(String(7), nullable=True)  # null = no end

    # Active flag
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    account: Mapped["Account"] = relationship("Account", back_populates="recurring_items")
    overrides: Mapped[list["PlannedItem"]] = relationship(
        "PlannedItem",
        foreign_keys="PlannedItem.linked_recurring_item_id",
        cascade="all, delete",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<RecurringItem(id={self.id}, name='{self.name}', "
            f"frequency={self.frequency.value})>"
        )
