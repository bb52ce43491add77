"""
Headless controllers for the interactive pages of the site.

* :class:`ContactForm` -- draft editing and a non-reentrant submit that
  ends in success (draft cleared) or failure (draft kept, error shown).
* :class:`ToolBrowser` -- the tools listing; overlapping searches follow
  "latest request wins" so a slow, superseded response never overwrites
  newer results.
* :class:`Playground` -- the chat log of the playground page. Each
  assistant reply runs a fixed plan of tool calls as :class:`ToolTask`
  objects through a dispatcher, honouring the configured execution
  timeout and retry count. The default dispatcher only simulates work.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from .client import HubClient, RequestSequencer
from .config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Contact form

class FormState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class ContactForm:
    FIELDS = ("name", "email", "subject", "message")

    def __init__(self, client: HubClient) -> None:
        self.client = client
        self.state = FormState.EDITING
        self.draft: Dict[str, str] = self._empty_draft()
        self.error: Optional[str] = None
        self.receipt: Optional[Dict[str, Any]] = None

    @classmethod
    def _empty_draft(cls) -> Dict[str, str]:
        return {name: "" for name in cls.FIELDS}

    @property
    def editable(self) -> bool:
        return self.state in (FormState.EDITING, FormState.FAILED)

    def set_field(self, name: str, value: str) -> None:
        if name not in self.FIELDS:
            raise KeyError(name)
        if self.editable:
            self.draft[name] = value

    async def submit(self) -> bool:
        """Send the draft; returns ``False`` when the call is ignored."""
        if not self.editable:
            return False
        self.state = FormState.SUBMITTING
        self.error = None

        try:
            envelope = await self.client.submit_contact(dict(self.draft))
        except Exception:
            logger.exception("Error submitting contact form")
            self.state = FormState.FAILED
            self.error = "Failed to send message. Please try again."
            return True

        if envelope.success:
            self.state = FormState.SUCCESS
            self.receipt = envelope.data
            self.draft = self._empty_draft()
        else:
            self.state = FormState.FAILED
            self.error = envelope.error or "Failed to send message"
        return True

    def reset(self) -> None:
        """Start a new message after a successful submission."""
        if self.state is FormState.SUCCESS:
            self.state = FormState.EDITING
            self.receipt = None


# ---------------------------------------------------------------------------
# Tools listing

class ToolBrowser:
    def __init__(self, client: HubClient) -> None:
        self.client = client
        self.tools: List[Dict[str, Any]] = []
        self.total = 0
        self.error: Optional[str] = None
        self.loading = False
        self._sequencer = RequestSequencer()

    async def search(self, **filters: Any) -> bool:
        """Run a listing; returns ``False`` when a newer search superseded it."""
        ticket = self._sequencer.next()
        self.loading = True
        envelope = await self.client.list_tools(**filters)
        if not self._sequencer.is_current(ticket):
            logger.debug("Discarding stale tools response (ticket %d)", ticket)
            return False

        self.loading = False
        if envelope.success:
            self.tools = envelope.data or []
            self.total = envelope.meta.total if envelope.meta else len(self.tools)
            self.error = None
        else:
            self.error = envelope.error or "Failed to fetch tools"
        return True


# ---------------------------------------------------------------------------
# Playground

class MessageType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class TaskStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PlaygroundConfig(BaseModel):
    """Timeouts (milliseconds) and retry counts shown on the playground."""

    connection_timeout: int = Field(5000, gt=0)
    tool_execution_timeout: int = Field(60000, gt=0)
    list_operations_timeout: int = Field(10000, gt=0)
    health_check_timeout: int = Field(5000, gt=0)
    connection_retries: int = Field(3, ge=0)
    tool_call_retries: int = Field(2, ge=0)
    list_operation_retries: int = Field(2, ge=0)


@dataclass
class ToolTask:
    tool: str
    server: str
    status: TaskStatus = TaskStatus.PENDING
    attempts: int = 0
    duration: Optional[float] = None
    output: Optional[str] = None
    error: Optional[str] = None


@dataclass
class PlaygroundMessage:
    id: str
    type: MessageType
    content: str
    timestamp: datetime
    tool_calls: List[ToolTask] = field(default_factory=list)


Dispatcher = Callable[[str, str, str], Awaitable[str]]


class SimulatedDispatcher:
    """Stand-in for a real MCP backend: waits, then returns canned output."""

    def __init__(self, latency: float = 2.0) -> None:
        self.latency = latency

    async def __call__(self, tool: str, server: str, prompt: str) -> str:
        await asyncio.sleep(self.latency)
        return f"{tool} on {server} completed"


async def run_task(
    task: ToolTask,
    dispatcher: Dispatcher,
    prompt: str,
    timeout: float,
    retries: int,
) -> ToolTask:
    """Dispatch ``task`` with a per-attempt timeout (seconds) and retries."""
    loop = asyncio.get_running_loop()
    started = loop.time()
    for attempt in range(1, retries + 2):
        task.attempts = attempt
        try:
            task.output = await asyncio.wait_for(dispatcher(task.tool, task.server, prompt), timeout)
        except asyncio.TimeoutError:
            task.error = f"timed out after {timeout:g}s"
        except Exception as exc:
            task.error = str(exc) or exc.__class__.__name__
            logger.warning("Tool %s on %s failed (attempt %d): %s", task.tool, task.server, attempt, exc)
        else:
            task.status = TaskStatus.SUCCEEDED
            task.error = None
            break
    else:
        task.status = TaskStatus.FAILED
    task.duration = loop.time() - started
    return task


DEFAULT_PLAN: Tuple[Tuple[str, str], ...] = (("search", "exa"), ("fetch_docs", "docs"))

STARTER_PROMPTS = [
    {"title": "Get smithery/sdk docs", "prompt": "Connect to @upstash/context7-mcp"},
    {"title": "Research MCP servers", "prompt": "Connect to exa and find recent articles and research"},
    {"title": "Get weather forecast", "prompt": "Connect to @smithery-ai/national-weather-service"},
]


class Playground:
    GREETING = (
        "MCP Playground initialized. Connected to 3 servers. "
        "Try the starter prompts below or give the agent a task."
    )

    def __init__(
        self,
        dispatcher: Optional[Dispatcher] = None,
        config: Optional[PlaygroundConfig] = None,
        plan: Sequence[Tuple[str, str]] = DEFAULT_PLAN,
    ) -> None:
        self.dispatcher = dispatcher or SimulatedDispatcher(get_settings().playground_latency)
        self.config = config or PlaygroundConfig()
        self.plan = list(plan)
        self.is_processing = False
        self._ids = itertools.count(1)
        self.messages: List[PlaygroundMessage] = []
        self._append(MessageType.SYSTEM, self.GREETING)

    def _append(
        self,
        kind: MessageType,
        content: str,
        tool_calls: Sequence[ToolTask] = (),
    ) -> PlaygroundMessage:
        message = PlaygroundMessage(
            id=str(next(self._ids)),
            type=kind,
            content=content,
            timestamp=datetime.now(timezone.utc),
            tool_calls=list(tool_calls),
        )
        self.messages.append(message)
        return message

    def update_config(self, **changes: Any) -> PlaygroundConfig:
        self.config = PlaygroundConfig(**{**self.config.model_dump(), **changes})
        return self.config

    async def send(self, text: str) -> Optional[PlaygroundMessage]:
        """Post a user message and wait for the assistant reply.

        Blank messages and sends while a reply is pending are ignored
        (``None`` is returned).
        """
        if not text.strip() or self.is_processing:
            return None
        self._append(MessageType.USER, text)
        self.is_processing = True
        try:
            timeout = self.config.tool_execution_timeout / 1000
            tasks = [ToolTask(tool=tool, server=server) for tool, server in self.plan]
            await asyncio.gather(*(
                run_task(task, self.dispatcher, text, timeout, self.config.tool_call_retries)
                for task in tasks
            ))
            content = (
                f'I\'ve processed your request: "{text}". '
                "Here are the results from the connected MCP servers."
            )
            failed = [t for t in tasks if t.status is TaskStatus.FAILED]
            if failed:
                names = ", ".join(f"{t.tool} ({t.server})" for t in failed)
                content += f" Some tool calls failed: {names}."
            return self._append(MessageType.ASSISTANT, content, tasks)
        finally:
            self.is_processing = False

    async def send_prompt(self, index: int) -> Optional[PlaygroundMessage]:
        return await self.send(STARTER_PROMPTS[index]["prompt"])
