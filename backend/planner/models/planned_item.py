from sqlalchemy import String, Integer, Float, ForeignKey, Enum, Boolean, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .enums import ItemType, Frequency, PlannedKind


class PlannedItem(Base, TimestampMixin):
    """
    A planned one-off or repeating income/expense.

    Rows with is_recurring_override set are occurrence overrides instead:
    they replace (or skip, with skip_occurrence) the occurrence of
    linked_recurring_item_id in scheduled_date. For those rows name, amount
    and category are optional replacement values.
    """

    __tablename__ = "planned_items"
    __table_args__ = (
        UniqueConstraint("linked_recurring_item_id", "scheduled_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False, index=True
    )

    type: Mapped[ItemType] = mapped_column(Enum(ItemType), nullable=False)
    kind: Mapped[PlannedKind] = mapped_column(
        Enum(PlannedKind), nullable=False, default=PlannedKind.ONE_OFF
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # One-off
    scheduled_date: Mapped[str | None] = mapped_column(String(7), nullable=True)

    # Repeating
    frequency: Mapped[Frequency | None] = mapped_column(Enum(Frequency), nullable=True)
    custom_interval_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    first_occurrence: Mapped[str | None] = mapped_column(String(7), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(7), nullable=True)

    # Occurrence override of a recurring item
    is_recurring_override: Mapped[bool] = mapped_column(Boolean, default=False)
    linked_recurring_item_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("recurring_items.id", ondelete="CASCADE"), nullable=True
    )
    skip_occurrence: Mapped[bool] = mapped_column(Boolean, default=False)

    account: Mapped["Account"] = relationship("Account", back_populates="planned_items")

    def __repr__(self) -> str:
        return f"<PlannedItem(id={self.id}, name='{self.name}', kind={self.kind.value})>"
