"""
Telegram webhook: POST /telegram/webhook receives Update objects and dispatches the message.
Always answers 200 {"ok": true} once the secret is valid, so Telegram does not redeliver on our errors.
"""
import logging

from fastapi import APIRouter, Depends

from moneyflow.api.deps import get_dispatcher, verify_webhook_secret
from moneyflow.schemas.telegram import Update
from moneyflow.services.dispatcher import CommandDispatcher
from moneyflow.transport.base import MessageSendError

router = APIRouter(prefix="/telegram", tags=["telegram"])
logger = logging.getLogger(__name__)


@router.post("/webhook", dependencies=[Depends(verify_webhook_secret)])
async def webhook(update: Update, dispatcher: CommandDispatcher = Depends(get_dispatcher)):
    """Handle one update. Non-message updates (edits, callbacks) are acknowledged and ignored."""
    message = update.message
    if message is None:
        logger.debug("Update %s has no message; ignored", update.update_id)
        return {"ok": True}
    try:
        handled = await dispatcher.dispatch(message)
        if not handled:
            logger.debug("Update %s not handled (text=%r)", update.update_id, (message.text or "")[:50])
    except MessageSendError as e:
        logger.warning("Update %s: reply not delivered to chat %s: %s", update.update_id, message.chat.id, e)
    except Exception as e:
        logger.exception("Update %s failed: %s", update.update_id, e)
    return {"ok": True}
