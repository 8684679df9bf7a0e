"""
Routes one inbound Telegram message: quiz first, then commands.
Tier-gated commands go through AccessControl.requires_feature.
"""
import asyncio
import logging

from moneyflow import messages
from moneyflow.models.types import Tier
from moneyflow.schemas.access import AccessResult
from moneyflow.schemas.telegram import Message
from moneyflow.services.access_control import AccessControl
from moneyflow.services.financial_quiz import FinancialQuiz
from moneyflow.services.message_splitter import send_long_message
from moneyflow.services.user_store import SqlUserStore
from moneyflow.transport.base import MessageTransport

logger = logging.getLogger(__name__)

# command -> feature required
FEATURE_COMMANDS: dict[str, str] = {
    "/admin_contact": "admin_access",
    "/priority_support": "priority_support",
    "/advanced_analytics": "advanced_analytics",
    "/book_session": "booking_system",
    "/capital_clarity": "capital_clarity",
    "/vip_reports": "vip_reports",
    **{f"/day{n}": "daily_lessons" for n in range(1, 8)},
}


def command_of(text: str | None) -> str | None:
    """Command word without the bot suffix: '/help@MyBot arg' -> '/help'. None for plain text."""
    stripped = (text or "").strip()
    if not stripped.startswith("/"):
        return None
    return stripped.split()[0].split("@", 1)[0].lower()


class CommandDispatcher:
    def __init__(
        self,
        quiz: FinancialQuiz,
        access: AccessControl,
        transport: MessageTransport,
        registrar: SqlUserStore | None = None,
    ):
        self.quiz = quiz
        self.access = access
        self.transport = transport
        self.registrar = registrar

    async def dispatch(self, message: Message) -> bool:
        """Handle message; False if nothing recognised it."""
        user_id = message.from_user.id if message.from_user else message.chat.id
        chat_id = message.chat.id
        text = message.text

        if self.quiz.is_quiz_message(user_id, text):
            if await self.quiz.handle_message(user_id, chat_id, text):
                return True

        command = command_of(text)
        if command is None:
            return False
        if command == "/start":
            await self._start(message, user_id)
            return True
        if command == "/help":
            help_text = await asyncio.to_thread(self.access.get_tier_specific_help, user_id)
            await send_long_message(self.transport, chat_id, help_text)
            return True
        if command == "/whoami":
            await self._whoami(chat_id, user_id)
            return True
        if command == "/support":
            info = await asyncio.to_thread(self.access.get_user_tier_info, user_id)
            await self.transport.send_message(chat_id, self.access.get_tier_support_message(info.tier))
            return True
        feature = FEATURE_COMMANDS.get(command)
        if feature is not None:
            guarded = self.access.requires_feature(feature, self.transport)(self._feature_granted(feature))
            await guarded(message)
            return True
        logger.debug("Unhandled command %s from user %s", command, user_id)
        return False

    async def _start(self, message: Message, user_id: int) -> None:
        if self.registrar is not None:
            first_name = message.from_user.first_name if message.from_user else None
            await asyncio.to_thread(self.registrar.register, user_id, first_name)
        await self.transport.send_message(message.chat.id, messages.WELCOME)

    async def _whoami(self, chat_id: int, user_id: int) -> None:
        info = await asyncio.to_thread(self.access.get_user_tier_info, user_id)
        paid = info.tier != Tier.FREE
        await self.transport.send_message(
            chat_id,
            messages.WHOAMI.format(
                badge=info.badge,
                tier_name=info.tier_info.name,
                status=messages.WHOAMI_PAID if paid else messages.WHOAMI_UNPAID,
                price=messages.WHOAMI_PRICE.format(price=info.price) if paid else "",
            ),
        )

    def _feature_granted(self, feature: str):
        async def handler(message: Message, access: AccessResult) -> None:
            await self.transport.send_message(
                message.chat.id,
                messages.FEATURE_GRANTED.format(
                    badge=self.access.tier_manager.get_tier_badge(access.user_tier),
                    feature=feature,
                    support=self.access.get_tier_support_message(access.user_tier),
                ),
            )

        return handler
