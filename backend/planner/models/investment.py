from sqlalchemy import String, Integer, Float, ForeignKey, Enum, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .enums import ContributionType, Frequency, ScheduleKind


class InvestmentAccount(Base, TimestampMixin):
    """An investment valued at valuation_date and compounded monthly."""

    __tablename__ = "investment_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")

    starting_valuation: Mapped[float] = mapped_column(Float, nullable=False)
    valuation_date: Mapped[str] = mapped_column(String(7), nullable=False)
    annual_growth_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)  # % p.a.

    account: Mapped["Account"] = relationship("Account", back_populates="investments")
    contributions: Mapped[list["InvestmentContribution"]] = relationship(
        "InvestmentContribution", back_populates="investment", cascade="all, delete-orphan",
        order_by="InvestmentContribution.id",
    )


class InvestmentContribution(Base, TimestampMixin):
    """Money paid into (or taken out of) an investment, once or on a schedule."""

    __tablename__ = "investment_contributions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    investment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("investment_accounts.id"), nullable=False
    )
    type: Mapped[ContributionType] = mapped_column(
        Enum(ContributionType), nullable=False, default=ContributionType.CONTRIBUTION
    )
    kind: Mapped[ScheduleKind] = mapped_column(
        Enum(ScheduleKind), nullable=False, default=ScheduleKind.ONE_OFF
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    scheduled_date: Mapped[str | None] = mapped_column(String(7), nullable=True)
    frequency: Mapped[Frequency | None] = mapped_column(Enum(Frequency), nullable=True)
    custom_interval_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    start_date: Mapped[str | None] = mapped_column(String(7), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(7), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    investment: Mapped["InvestmentAccount"] = relationship(
        "InvestmentAccount", back_populates="contributions"
    )
