from sqlalchemy import String, Integer, Float, ForeignKey, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Receivable(Base, TimestampMixin):
    """
    Money lent to someone else.

    Recorded repayments are authoritative; months without one are projected
    with expected_monthly_repayment.
    """

    __tablename__ = "receivables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")

    initial_principal: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[str] = mapped_column(String(7), nullable=False)
    has_interest: Mapped[bool] = mapped_column(Boolean, default=False)
    annual_interest_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    expected_monthly_repayment: Mapped[float | None] = mapped_column(Float, nullable=True)

    account: Mapped["Account"] = relationship("Account", back_populates="receivables")
    repayments: Mapped[list["ReceivableRepayment"]] = relationship(
        "ReceivableRepayment", back_populates="receivable", cascade="all, delete-orphan",
        order_by="ReceivableRepayment.date",
    )


class ReceivableRepayment(Base):
    """An actual repayment received."""

    __tablename__ = "receivable_repayments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    receivable_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("receivables.id"), nullable=False
    )
    date: Mapped[str] = mapped_column(String(7), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    receivable: Mapped["Receivable"] = relationship("Receivable", back_populates="repayments")
