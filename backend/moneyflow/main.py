"""
FastAPI application entrypoint.
Run with: uvicorn moneyflow.main:app --port 8000 (from backend/)

Routes:
  - Telegram: POST /telegram/webhook (register it with setWebhook; optional secret via TELEGRAM_WEBHOOK_SECRET)
  - Health:   GET /health (status + in-process counters)

Without TELEGRAM_BOT_TOKEN replies go to the mock transport and are only logged.
"""
import logging

from fastapi import FastAPI

from moneyflow import metrics
from moneyflow.config import settings
from moneyflow.api.telegram import router as telegram_router

app = FastAPI(
    title="Money Flow Reset Bot",
    description="Telegram bot backend: financial health quiz, tier-gated commands, long-message splitting.",
    version="0.1.0",
)

app.include_router(telegram_router)


@app.on_event("startup")
def startup():
    """Init SQLite user store and log transport status. Fail fast if production has no bot token."""
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    _log = logging.getLogger("moneyflow.main")
    token = (settings.telegram_bot_token or "").strip()
    if (getattr(settings, "env", "") or "").strip().lower() == "production":
        if not token:
            _log.critical("TELEGRAM_BOT_TOKEN must be set in production. Set it in env or .env.")
            raise RuntimeError("TELEGRAM_BOT_TOKEN must be set in production. Set it in env or .env.")
        if not (settings.telegram_webhook_secret or "").strip():
            _log.warning("TELEGRAM_WEBHOOK_SECRET not set; webhook accepts unauthenticated calls.")
    if token:
        _log.info("Telegram: bot token loaded (len=%s). Replies will be delivered.", len(token))
    else:
        _log.warning("Telegram: no bot token. Set TELEGRAM_BOT_TOKEN in backend/.env (using mock transport).")
    from moneyflow.database import init_sqlite_db
    init_sqlite_db()
    _log.info(
        "Quiz sessions expire after %s; follow-up delay %.0fs",
        f"{settings.quiz_session_ttl_seconds}s" if settings.session_ttl else "never",
        settings.quiz_follow_up_delay_seconds,
    )


@app.on_event("shutdown")
async def shutdown():
    """Close the Telegram HTTP client if one was created. Pending follow-ups are dropped."""
    from moneyflow.api.deps import get_follow_up_scheduler, get_transport
    scheduler = get_follow_up_scheduler()
    if scheduler.pending:
        logging.getLogger("moneyflow.main").warning("Shutdown: dropping %s pending follow-up(s)", scheduler.pending)
    transport = get_transport()
    aclose = getattr(transport, "aclose", None)
    if aclose is not None:
        await aclose()


@app.get("/health")
def health():
    """Health check (JSON) with process-local counters."""
    return {"status": "ok", "message": "Money Flow Reset Bot", "counters": metrics.snapshot()}
