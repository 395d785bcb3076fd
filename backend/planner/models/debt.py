from sqlalchemy import String, Integer, Float, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .enums import DebtType, InterestModel


class Debt(Base, TimestampMixin):
    """
    A loan paid from an account.

    Amortized debts split monthly_payment into interest and principal;
    fixed-installment debts pay installment_amount total_installments times
    with no interest. Rates are annual percentages.
    """

    __tablename__ = "debts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")

    debt_type: Mapped[DebtType] = mapped_column(Enum(DebtType), nullable=False)
    initial_principal: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[str] = mapped_column(String(7), nullable=False)

    # Amortized
    interest_model_type: Mapped[InterestModel] = mapped_column(
        Enum(InterestModel), nullable=False, default=InterestModel.NONE
    )
    fixed_interest_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    reference_rate_margin: Mapped[float | None] = mapped_column(Float, nullable=True)
    monthly_payment: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Fixed installment
    installment_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_installments: Mapped[int | None] = mapped_column(Integer, nullable=True)

    account: Mapped["Account"] = relationship("Account", back_populates="debts")
    reference_rates: Mapped[list["DebtReferenceRate"]] = relationship(
        "DebtReferenceRate", back_populates="debt", cascade="all, delete-orphan",
        order_by="DebtReferenceRate.year_month",
    )
    extra_payments: Mapped[list["DebtExtraPayment"]] = relationship(
        "DebtExtraPayment", back_populates="debt", cascade="all, delete-orphan",
        order_by="DebtExtraPayment.date",
    )

    def __repr__(self) -> str:
        return f"<Debt(id={self.id}, name='{self.name}', type={self.debt_type.value})>"


class DebtReferenceRate(Base):
    """Reference (benchmark) rate for a variable-rate debt in one month."""

    __tablename__ = "debt_reference_rates"
    __table_args__ = (
        UniqueConstraint("debt_id", "year_month"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    debt_id: Mapped[int] = mapped_column(Integer, ForeignKey("debts.id"), nullable=False)
    year_month: Mapped[str] = mapped_column(String(7), nullable=False)
    rate: Mapped[float] = mapped_column(Float, nullable=False)

    debt: Mapped["Debt"] = relationship("Debt", back_populates="reference_rates")


class DebtExtraPayment(Base):
    """Additional principal reduction made in a given month."""

    __tablename__ = "debt_extra_payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    debt_id: Mapped[int] = mapped_column(Integer, ForeignKey("debts.id"), nullable=False)
    date: Mapped[str] = mapped_column(String(7), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    debt: Mapped["Debt"] = relationship("Debt", back_populates="extra_payments")
