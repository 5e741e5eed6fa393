"""Debug tap that logs every message passing between host and server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import anyio

logger = logging.getLogger(__name__)


def _describe(item) -> str:
    if isinstance(item, Exception):
        return f"<error {item!r}>"
    message = getattr(item, "message", item)
    dump = getattr(message, "model_dump_json", None)
    if dump is not None:
        return dump(by_alias=True, exclude_none=True)
    return repr(message)


async def _pump(source, sink, label: str) -> None:
    async with sink:
        async for item in source:
            logger.debug("%s %s", label, _describe(item))
            try:
                await sink.send(item)
            except (anyio.BrokenResourceError, anyio.ClosedResourceError):
                logger.debug("%s: receiver closed, dropping %s", label, _describe(item))
                return


@asynccontextmanager
async def traffic_logged(read_stream, write_stream):
    """
    Wrap a transport's stream pair so each message is logged at DEBUG.

    Yields a ``(read, write)`` pair to hand to the server in place of the
    originals. Messages are forwarded unchanged and in order.
    """

    in_send, in_recv = anyio.create_memory_object_stream(0)
    out_send, out_recv = anyio.create_memory_object_stream(0)
    inbound = anyio.CancelScope()

    async def pump_inbound() -> None:
        with inbound:
            await _pump(read_stream, in_send, "From host:")

    async with anyio.create_task_group() as tg:
        tg.start_soon(pump_inbound)
        tg.start_soon(_pump, out_recv, write_stream, "To host:")
        try:
            yield in_recv, out_send
        finally:
            # Let queued outbound messages drain; stop waiting on the host.
            await out_send.aclose()
            await in_recv.aclose()
            inbound.cancel()
