"""
Tier-based access control. Fails closed: unknown users, unpaid users and lookup errors are all denied.
Every denial carries a user-facing message.
"""
import asyncio
import functools
import logging
from typing import Awaitable, Callable

from moneyflow import messages
from moneyflow.config import settings
from moneyflow.models.types import Tier
from moneyflow.schemas.access import AccessResult, UserTierInfo
from moneyflow.schemas.telegram import Message
from moneyflow.services.tier_manager import TierManager
from moneyflow.services.user_store import UserStore
from moneyflow.transport.base import MessageTransport

logger = logging.getLogger(__name__)

# Handler guarded by requires_feature: (message, access) -> None
GuardedHandler = Callable[[Message, AccessResult], Awaitable[None]]


class AccessControl:
    def __init__(self, user_store: UserStore, tier_manager: TierManager | None = None):
        self.user_store = user_store
        self.tier_manager = tier_manager or TierManager()

    def _resolve_tier(self, user) -> Tier:
        return Tier(user.tier or settings.default_paid_tier)

    def check_access(self, telegram_id: int, feature: str) -> AccessResult:
        """Whether telegram_id may use feature, with the resolved tier (free for unknown/unpaid)."""
        try:
            user = self.user_store.find_one(telegram_id)
            if not user:
                return AccessResult(has_access=False, user_tier=Tier.FREE, message=messages.ACCESS_NOT_REGISTERED)
            if not user.is_paid:
                return AccessResult(has_access=False, user_tier=Tier.FREE, message=messages.ACCESS_NOT_PAID)

            user_tier = self._resolve_tier(user)
            if not self.tier_manager.has_feature_access(user_tier, feature):
                badge = self.tier_manager.get_tier_badge(user_tier)
                return AccessResult(
                    has_access=False,
                    user_tier=user_tier,
                    message=messages.ACCESS_UPGRADE_REQUIRED.format(badge=badge),
                )
            return AccessResult(has_access=True, user_tier=user_tier, user=user)
        except Exception as e:
            logger.exception("Access check failed for user %s, feature %s: %s", telegram_id, feature, e)
            return AccessResult(has_access=False, user_tier=Tier.FREE, message=messages.ACCESS_ERROR)

    def _free_tier_info(self) -> UserTierInfo:
        return UserTierInfo(
            tier=Tier.FREE,
            tier_info=self.tier_manager.get_tier_info(Tier.FREE),
            badge=self.tier_manager.get_tier_badge(Tier.FREE),
        )

    def get_user_tier_info(self, telegram_id: int) -> UserTierInfo:
        """Tier, badge and payment details; free tier for unknown or unpaid users and on errors."""
        try:
            user = self.user_store.find_one(telegram_id)
            if not user or not user.is_paid:
                return self._free_tier_info()
            user_tier = self._resolve_tier(user)
            return UserTierInfo(
                tier=user_tier,
                tier_info=self.tier_manager.get_tier_info(user_tier),
                badge=self.tier_manager.get_tier_badge(user_tier),
                price=user.tier_price or 0,
                paid_at=user.payment_date,
            )
        except Exception as e:
            logger.exception("Getting tier info failed for user %s: %s", telegram_id, e)
            return self._free_tier_info()

    def get_tier_specific_help(self, telegram_id: int) -> str:
        """Help text listing the commands available at the user's tier."""
        try:
            info = self.get_user_tier_info(telegram_id)
            user = self.user_store.find_one(telegram_id)
            is_paid = bool(user and user.is_paid)
            base = messages.HELP_BASE_COMMANDS.format(
                pricing=messages.PRICING_PAID if is_paid else messages.PRICING_UNPAID
            )
            logger.debug("Building help for user %s (tier=%s, paid=%s)", telegram_id, info.tier.value, is_paid)

            if info.tier == Tier.FREE:
                return messages.HELP_FREE.format(badge=info.badge, base=base) + messages.HELP_FOOTER

            specific = ""
            if info.tier in (Tier.PREMIUM, Tier.VIP):
                specific += messages.HELP_PREMIUM_COMMANDS
            if info.tier == Tier.VIP:
                specific += messages.HELP_VIP_COMMANDS
            return messages.HELP_PAID.format(
                badge=info.badge,
                tier_name=info.tier_info.name or info.tier.value,
                base=base,
                paid=messages.HELP_PAID_COMMANDS,
                specific=specific,
            ) + messages.HELP_FOOTER
        except Exception as e:
            logger.exception("Building help failed for user %s: %s", telegram_id, e)
            return messages.HELP_FALLBACK

    def get_tier_support_message(self, tier: Tier | str | None) -> str:
        try:
            return messages.TIER_SUPPORT[Tier(tier)]
        except ValueError:
            return messages.TIER_SUPPORT[Tier.FREE]

    def has_admin_access(self, telegram_id: int) -> bool:
        return self.check_access(telegram_id, "admin_access").has_access

    def can_book_sessions(self, telegram_id: int) -> bool:
        return self.check_access(telegram_id, "booking_system").has_access

    def requires_feature(
        self, feature: str, transport: MessageTransport
    ) -> Callable[[GuardedHandler], Callable[[Message], Awaitable[bool]]]:
        """
        Decorator for async command handlers. Denied users get the gate message;
        allowed users reach the handler with the AccessResult. The wrapper returns has_access.
        """

        def decorator(handler: GuardedHandler) -> Callable[[Message], Awaitable[bool]]:
            @functools.wraps(handler)
            async def wrapper(message: Message) -> bool:
                user_id = message.from_user.id if message.from_user else message.chat.id
                # User store is synchronous (SQLAlchemy); keep it off the event loop
                access = await asyncio.to_thread(self.check_access, user_id, feature)
                if not access.has_access:
                    await transport.send_message(message.chat.id, access.message or messages.ACCESS_ERROR)
                    return False
                await handler(message, access)
                return True

            return wrapper

        return decorator
