"""
User model: Telegram identity plus payment state (is_paid, tier, tier_price, payment_date).
Access control reads it; only /start registration writes it from this service.
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import BigInteger, Boolean, CheckConstraint, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from moneyflow.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    telegram_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False, index=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    tier: Mapped[str | None] = mapped_column(String(20), nullable=True)  # free | essential | premium | vip
    tier_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    payment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "tier IS NULL OR tier IN ('free', 'essential', 'premium', 'vip')",
            name="users_tier_check",
        ),
    )
