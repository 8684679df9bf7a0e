"""
Access control and tier schemas.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict

from moneyflow.models.types import Tier


class TierInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    tier: Tier
    name: str
    price: int
    badge: str
    features: frozenset[str]


class AccessResult(BaseModel):
    """Outcome of a feature check. message is set on every denial; user only on grant."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    has_access: bool
    user_tier: Tier
    message: str | None = None
    user: Any = None


class UserTierInfo(BaseModel):
    tier: Tier
    tier_info: TierInfo
    badge: str
    price: Decimal | None = None
    paid_at: datetime | None = None
