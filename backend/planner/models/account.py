from sqlalchemy import String, Integer, Float, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Account(Base, TimestampMixin):
    """
    A cash account whose balance is projected forward.

    starting_balance is the balance at the start of starting_date.
    planning_horizon_months of -1 means the horizon ends at custom_end_date.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")

    starting_balance: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    starting_date: Mapped[str] = mapped_column(String(7), nullable=False)  # YYYY-MM
    planning_horizon_months: Mapped[int] = mapped_column(Integer, nullable=False, default=120)
    custom_end_date: Mapped[str | None] = mapped_column(String(7), nullable=True)

    is_archived: Mapped[bool] = mapped_column(Boolean, default=False)

    # Display order for UI
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    recurring_items: Mapped[list["RecurringItem"]] = relationship(
        "RecurringItem", back_populates="account", cascade="all, delete-orphan"
    )
    planned_items: Mapped[list["PlannedItem"]] = relationship(
        "PlannedItem", back_populates="account", cascade="all, delete-orphan"
    )
    salary_configs: Mapped[list["SalaryConfig"]] = relationship(
        "SalaryConfig", back_populates="account", cascade="all, delete-orphan"
    )
    taxed_incomes: Mapped[list["TaxedIncome"]] = relationship(
        "TaxedIncome", back_populates="account", cascade="all, delete-orphan"
    )
    debts: Mapped[list["Debt"]] = relationship(
        "Debt", back_populates="account", cascade="all, delete-orphan"
    )
    investments: Mapped[list["InvestmentAccount"]] = relationship(
        "InvestmentAccount", back_populates="account", cascade="all, delete-orphan"
    )
    receivables: Mapped[list["Receivable"]] = relationship(
        "Receivable", back_populates="account", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, name='{self.name}', currency='{self.currency}')>"
