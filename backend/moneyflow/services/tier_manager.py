"""
Static tier table: which features each payment tier unlocks, plus display name, price and badge.
Tiers are cumulative (each includes everything below it).
"""
from moneyflow.models.types import Tier
from moneyflow.schemas.access import TierInfo

_FREE_FEATURES = frozenset({"financial_quiz", "preview", "free_tools"})
_ESSENTIAL_FEATURES = _FREE_FEATURES | {"daily_lessons", "extended_program", "progress_tracking", "quotes"}
_PREMIUM_FEATURES = _ESSENTIAL_FEATURES | {"admin_access", "priority_support", "advanced_analytics"}
_VIP_FEATURES = _PREMIUM_FEATURES | {"booking_system", "capital_clarity", "vip_reports", "extended_tracking"}

TIERS: dict[Tier, TierInfo] = {
    Tier.FREE: TierInfo(tier=Tier.FREE, name="Free", price=0, badge="🔓", features=_FREE_FEATURES),
    Tier.ESSENTIAL: TierInfo(tier=Tier.ESSENTIAL, name="Essential", price=47, badge="🎯", features=_ESSENTIAL_FEATURES),
    Tier.PREMIUM: TierInfo(tier=Tier.PREMIUM, name="Premium", price=97, badge="🚀", features=_PREMIUM_FEATURES),
    Tier.VIP: TierInfo(tier=Tier.VIP, name="VIP", price=197, badge="👑", features=_VIP_FEATURES),
}


class TierManager:
    def get_tier_info(self, tier: Tier | str) -> TierInfo:
        """Info for tier; raises ValueError for a value outside Tier."""
        return TIERS[Tier(tier)]

    def get_tier_badge(self, tier: Tier | str) -> str:
        return self.get_tier_info(tier).badge

    def has_feature_access(self, tier: Tier | str, feature: str) -> bool:
        return feature in self.get_tier_info(tier).features
