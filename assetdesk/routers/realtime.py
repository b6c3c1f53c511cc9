import logging
import anyio
import anyio.to_thread
from fastapi import APIRouter, WebSocket
from assetdesk.realtime import feed

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

TABLES = {
    "inventory", "licenses", "assigned_assets", "accounts", "activities",
    "history", "meetings", "endorsed_tickets",
}


@router.websocket("/ws/changes/{table}")
async def changes(websocket: WebSocket, table: str, referenceid: str | None = None):
    """Streams insert/update/delete events of one table, optionally for one referenceid."""
    if table not in TABLES:
        await websocket.close(code=1008)
        return

    sub = feed.subscribe(table, {"referenceid": referenceid})
    await websocket.accept()
    logger.debug("Subscriber joined %s (referenceid=%s)", table, referenceid)
    try:
        async with anyio.create_task_group() as tg:
            async def watch_disconnect():
                while True:
                    message = await websocket.receive()
                    if message["type"] == "websocket.disconnect":
                        break
                tg.cancel_scope.cancel()

            tg.start_soon(watch_disconnect)
            while True:
                event = await anyio.to_thread.run_sync(sub.get, 0.5)
                if event is not None:
                    await websocket.send_json(event)
    finally:
        sub.close()
        logger.debug("Subscriber left %s", table)
