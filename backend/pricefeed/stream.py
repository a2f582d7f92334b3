"""SSE streaming endpoint for the selected live price."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from .feed import PriceFeed

logger = logging.getLogger(__name__)


def create_stream_router(feed: PriceFeed) -> APIRouter:
    """Create the SSE streaming router with a reference to the price feed.

    This factory pattern lets us inject the PriceFeed without globals.
    """
    router = APIRouter(prefix="/api/stream", tags=["streaming"])

    @router.get("/price")
    async def stream_price(request: Request) -> StreamingResponse:
        """SSE endpoint for the currently selected price.

        Emits an event whenever the feed's update counter moves, even when the
        quote itself did not change:

            data: {"currency_code": "EUR", "price_type": "Last", "price": 60012.5, "update_count": 7, "market_price": {...}}

        Includes a retry directive so the browser auto-reconnects on
        disconnection (EventSource built-in behavior).
        """
        return StreamingResponse(
            _generate_events(feed, request),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


def _selection_payload(feed: PriceFeed) -> dict:
    market_price = feed.get_price(feed.currency_code) if feed.currency_code else None
    return {
        "currency_code": feed.currency_code,
        "price_type": feed.price_type.display_name if feed.price_type else None,
        "price": feed.selected_price,
        "update_count": feed.update_count,
        "market_price": market_price.to_dict() if market_price else None,
    }


async def _generate_events(
    feed: PriceFeed,
    request: Request,
    interval: float = 0.5,
) -> AsyncGenerator[str, None]:
    """Async generator that yields SSE-formatted selection events.

    Polls the feed every `interval` seconds. Stops when the client
    disconnects (detected via request.is_disconnected()).
    """
    yield "retry: 1000\n\n"

    last_count = -1
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)

    try:
        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            current_count = feed.update_count
            if current_count != last_count:
                last_count = current_count
                yield f"data: {json.dumps(_selection_payload(feed))}\n\n"

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
