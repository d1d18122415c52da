"""Inbound message handling and outbound share/send between agents."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime

import aiohttp

from swarmthing.config.constants import UNKNOWN_SENDER
from swarmthing.core.worker import AsyncWorker, CancelToken, WorkCancelled, get_worker
from swarmthing.errors import NetworkError, ToolNotFoundError, ToolStoreError
from swarmthing.ipc.messages import (
    ToolRequestMessage,
    ToolShareMessage,
    decode,
    encode,
)
from swarmthing.tools.pending import PendingQueue, PendingTool
from swarmthing.tools.safety import classify
from swarmthing.tools.store import ToolStore
from swarmthing.utils.logger import ipc_logger


@dataclass(frozen=True)
class ReceivedText:
    content: str
    sender: str
    received_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class MessageLog:
    """Thread-safe, append-only log of received text messages."""

    def __init__(self) -> None:
        self._items: list[ReceivedText] = []
        self._lock = threading.Lock()

    def append(self, item: ReceivedText) -> None:
        with self._lock:
            self._items.append(item)

    def snapshot(self) -> list[ReceivedText]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class TransportGateway:
    def __init__(
        self,
        store: ToolStore,
        queue: PendingQueue,
        *,
        timeout: float = 30.0,
        user_agent: str | None = None,
        worker: AsyncWorker | None = None,
    ) -> None:
        self.store = store
        self.queue = queue
        self.messages = MessageLog()
        self.timeout = timeout
        self.user_agent = user_agent
        self._worker = worker

    @property
    def worker(self) -> AsyncWorker:
        return self._worker or get_worker()

    # Inbound

    def receive(self, payload: str, sender: str | None = None) -> str:
        """Handle one inbound payload and return the acknowledgement text."""
        sender = sender or UNKNOWN_SENDER
        message = decode(payload)

        if isinstance(message, ToolShareMessage):
            return self._receive_tool_share(message, sender)
        if isinstance(message, ToolRequestMessage):
            ipc_logger.info("Tool request received", tool=message.name, sender=sender)
            return f"Tool request for '{message.name}' acknowledged (not implemented)"

        self.messages.append(ReceivedText(message.content, sender))
        ipc_logger.info("Message received", sender=sender, content=message.content)
        return message.content

    def _receive_tool_share(self, message: ToolShareMessage, sender: str) -> str:
        computed = classify(message.code)
        if message.safety_level < computed:
            ipc_logger.warning(
                "Shared tool under-reports its risk",
                tool=message.name,
                sender=sender,
                claimed=str(message.safety_level),
                computed=str(computed),
            )
        level = max(message.safety_level, computed)

        self.queue.enqueue(
            PendingTool(
                name=message.name,
                code=message.code,
                source_agent=sender,
                description=message.description,
                safety_level=level,
            )
        )
        return f"Tool '{message.name}' queued for approval ({level})"

    # Outbound

    def send(
        self, target: str, text: str, cancel_token: CancelToken | None = None
    ) -> str:
        """POST text as message content; returns "Response: <body>" or an error."""
        ipc_logger.info("Sending message", target=target)
        try:
            body = self.post(target, text, cancel_token=cancel_token)
        except NetworkError as e:
            return f"Error sending message: {e}"
        return f"Response: {body}"

    def share(
        self, target: str, tool_name: str, cancel_token: CancelToken | None = None
    ) -> str:
        """Send a stored tool to another agent as a ToolShare message."""
        try:
            code = self.store.inspect(tool_name)
        except ToolNotFoundError:
            return f"Error: Tool '{tool_name}' not found"
        except ToolStoreError as e:
            return f"Error sharing tool: {e}"

        level = classify(code)
        envelope = encode(
            ToolShareMessage(name=tool_name, code=code, safety_level=level)
        )
        ipc_logger.info(
            "Sharing tool", tool=tool_name, target=target, safety=str(level)
        )
        try:
            body = self.post(target, envelope, cancel_token=cancel_token)
        except NetworkError as e:
            return f"Error sharing tool: {e}"
        return f"Response: {body}"

    def post(
        self, target: str, content: str, cancel_token: CancelToken | None = None
    ) -> str:
        """Blocking POST of {"content": content} to target, bounded by timeout.

        Raises:
            NetworkError: on connection failure, timeout or cancellation.
        """
        try:
            return self.worker.submit(
                self._post(target, content), self.timeout, cancel_token
            )
        except TimeoutError as e:
            raise NetworkError(f"request to {target} timed out") from e
        except WorkCancelled as e:
            raise NetworkError(f"request to {target} was cancelled") from e

    async def _post(self, target: str, content: str) -> str:
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
                async with session.post(target, json={"content": content}) as resp:
                    return await resp.text()
        except (aiohttp.ClientError, ValueError) as e:
            ipc_logger.warning("Outbound request failed", target=target, error=str(e))
            raise NetworkError(str(e) or type(e).__name__) from e
