from sqlalchemy import String, Integer, Float, ForeignKey, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class SalaryConfig(Base, TimestampMixin):
    """
    Gross salary with tax/contribution rates and benefits.

    The net figure is derived by the salary calculator, never stored.
    Rates are percentages (25 means 25%).
    """

    __tablename__ = "salary_configs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    gross_salary: Mapped[float] = mapped_column(Float, nullable=False)
    tax_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    contributions_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    other_deductions: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    start_date: Mapped[str] = mapped_column(String(7), nullable=False)
    end_date: Mapped[str | None] = mapped_column(String(7), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # When linked, a recurring income item carries the net salary instead
    is_linked_to_recurring: Mapped[bool] = mapped_column(Boolean, default=False)
    linked_recurring_item_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("recurring_items.id", ondelete="SET NULL"), nullable=True
    )

    account: Mapped["Account"] = relationship("Account", back_populates="salary_configs")
    benefits: Mapped[list["SalaryBenefit"]] = relationship(
        "SalaryBenefit", back_populates="salary_config", cascade="all, delete-orphan",
        order_by="SalaryBenefit.id",
    )

    def __repr__(self) -> str:
        return f"<SalaryConfig(id={self.id}, name='{self.name}', gross={self.gross_salary})>"


class SalaryBenefit(Base):
    """A benefit in kind. Taxable benefits widen the tax base but are never paid out."""

    __tablename__ = "salary_benefits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    salary_config_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("salary_configs.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    is_taxable: Mapped[bool] = mapped_column(Boolean, default=False)

    salary_config: Mapped["SalaryConfig"] = relationship(
        "SalaryConfig", back_populates="benefits"
    )
