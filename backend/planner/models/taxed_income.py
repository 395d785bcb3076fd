from sqlalchemy import String, Integer, Float, ForeignKey, Enum, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .enums import Frequency, ScheduleKind


class TaxedIncome(Base, TimestampMixin):
    """
    Gross income (bonus, freelance invoice, ...) that is taxed before it lands.

    Uses the account's active salary rates when use_salary_tax_settings is
    set, otherwise the custom_* rates.
    """

    __tablename__ = "taxed_incomes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gross_amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    use_salary_tax_settings: Mapped[bool] = mapped_column(Boolean, default=False)
    custom_tax_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    custom_contributions_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    custom_other_deductions: Mapped[float | None] = mapped_column(Float, nullable=True)

    kind: Mapped[ScheduleKind] = mapped_column(
        Enum(ScheduleKind), nullable=False, default=ScheduleKind.ONE_OFF
    )
    scheduled_date: Mapped[str | None] = mapped_column(String(7), nullable=True)
    frequency: Mapped[Frequency | None] = mapped_column(Enum(Frequency), nullable=True)
    custom_interval_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    start_date: Mapped[str | None] = mapped_column(String(7), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(7), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    account: Mapped["Account"] = relationship("Account", back_populates="taxed_incomes")
