"""
Split long replies for Telegram's 4096-character limit and send them as paced parts.
Line breaks are kept where possible; over-long lines fall back to word packing, over-long words are hard-cut.
"""
import asyncio
import logging

from moneyflow import messages, metrics
from moneyflow.config import TELEGRAM_MAX_MESSAGE_LENGTH, settings
from moneyflow.transport.base import MessageTransport

logger = logging.getLogger(__name__)


def split_message(text: str, max_length: int = TELEGRAM_MAX_MESSAGE_LENGTH) -> list[str]:
    """
    Split text into ordered chunks of at most max_length characters.
    Text that already fits is returned unchanged as a single chunk (so "" -> [""]).
    Flushed chunks are stripped; chunks that strip to nothing are dropped.
    """
    if max_length <= 0:
        raise ValueError("max_length must be positive")
    if len(text) <= max_length:
        return [text]

    chunks: list[str] = []
    current = ""

    def flush() -> None:
        nonlocal current
        piece = current.strip()
        if piece:
            chunks.append(piece)
        current = ""

    for line in text.split("\n"):
        if len(line) > max_length:
            flush()
            for word in line.split(" "):
                if current and len(current) + 1 + len(word) <= max_length:
                    current += " " + word
                    continue
                if current:
                    flush()
                # Word longer than a whole chunk: hard-cut until the tail fits
                while len(word) > max_length:
                    chunks.append(word[:max_length])
                    word = word[max_length:]
                current = word
        elif not current:
            current = line
        elif len(current) + 1 + len(line) <= max_length:
            current += "\n" + line
        else:
            flush()
            current = line

    flush()
    return chunks


def split_message_with_parts(
    text: str,
    part_prefix: str | None = None,
    max_length: int = TELEGRAM_MAX_MESSAGE_LENGTH,
) -> list[str]:
    """
    Like split_message, but prefix each chunk with "📝 Part i/N" when there is more than one.
    Room for the marker is reserved, so every marked part is still at most max_length.
    """
    chunks = split_message(text, max_length=max_length)
    if len(chunks) == 1:
        return chunks
    prefix = part_prefix if part_prefix is not None else settings.part_prefix
    total = len(chunks)
    while True:
        # Widest marker for this many parts; re-split if reserving it adds parts
        reserve = len(messages.PART_MARKER.format(prefix=prefix, index=total, total=total))
        if reserve >= max_length:
            raise ValueError(f"max_length {max_length} leaves no room after the part marker")
        chunks = split_message(text, max_length=max_length - reserve)
        if len(chunks) <= total:
            break
        total = len(chunks)
    total = len(chunks)
    return [
        messages.PART_MARKER.format(prefix=prefix, index=i, total=total) + chunk
        for i, chunk in enumerate(chunks, start=1)
    ]


async def send_long_message(
    transport: MessageTransport,
    chat_id: int,
    message: str,
    options: dict | None = None,
    delay_seconds: float | None = None,
    max_length: int | None = None,
) -> int:
    """
    Send message as one or more chunks, in order, pausing delay_seconds between chunks.
    A failed send aborts the remaining chunks and is re-raised; chunks already sent stay sent.
    Returns the number of chunks sent (0 for a long message that is only whitespace).
    """
    delay = settings.long_message_delay_seconds if delay_seconds is None else delay_seconds
    chunks = split_message(message, max_length=max_length or settings.max_message_length)
    if not chunks:
        logger.debug("Nothing to send to chat %s: message is only whitespace", chat_id)
        return 0
    total = len(chunks)
    for i, chunk in enumerate(chunks):
        try:
            await transport.send_message(chat_id, chunk, **(options or {}))
        except Exception:
            metrics.increment_counter("message_send_failures_total")
            logger.exception("Error sending message chunk %s/%s to chat %s", i + 1, total, chat_id)
            raise
        if i < total - 1 and delay > 0:
            await asyncio.sleep(delay)
    if total > 1:
        logger.debug("Sent %s chunks to chat %s", total, chat_id)
    return total
