"""Websocket transport for the orders notification channel."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.schemas.events import ORDERS_CHANNEL
from app.services.notifications import NotificationBus

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws/orders")
async def orders_feed(websocket: WebSocket) -> None:
    """Relay every bus event to the connected viewer until it disconnects.

    Publishers run on worker threads; they wake this coroutine through the
    event loop, so an idle viewer holds no thread.
    """
    bus: NotificationBus = websocket.app.state.notification_bus
    loop = asyncio.get_running_loop()
    wakeup = asyncio.Event()
    # Attach before accepting so nothing published after the handshake is missed.
    subscription = bus.subscribe(notify=lambda: loop.call_soon_threadsafe(wakeup.set))
    receiver: asyncio.Future | None = None
    waiter: asyncio.Future | None = None
    try:
        await websocket.accept()
        receiver = asyncio.ensure_future(websocket.receive())
        waiter = asyncio.ensure_future(wakeup.wait())
        while True:
            done, _ = await asyncio.wait({receiver, waiter}, return_when=asyncio.FIRST_COMPLETED)

            if receiver in done:
                message = receiver.result()
                if message["type"] == "websocket.disconnect":
                    break
                receiver = asyncio.ensure_future(websocket.receive())

            if waiter in done:
                wakeup.clear()
                for event in subscription.drain():
                    await websocket.send_json({"channel": ORDERS_CHANNEL, "payload": event})
                waiter = asyncio.ensure_future(wakeup.wait())
    except WebSocketDisconnect:
        pass
    finally:
        for pending in (receiver, waiter):
            if pending is not None and not pending.done():
                pending.cancel()
        subscription.close()
        logger.debug("[NOTIFY] Websocket viewer detached")
