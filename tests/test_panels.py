"""Tests for the contact form, tools listing and playground controllers."""

import asyncio

import pytest

from mcphub.models import Envelope, Meta
from mcphub.panels import (
    ContactForm,
    FormState,
    MessageType,
    Playground,
    PlaygroundConfig,
    SimulatedDispatcher,
    TaskStatus,
    ToolBrowser,
)


def fill(form, payload):
    for name, value in payload.items():
        form.set_field(name, value)


class GatedClient:
    """Client stub whose calls block until the test releases them."""

    def __init__(self):
        self.gates = []

    async def _wait(self):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()

    async def submit_contact(self, message):
        await self._wait()
        return Envelope.ok({"id": "1", "message": "thanks"})

    async def list_tools(self, **filters):
        await self._wait()
        return Envelope.ok([{"name": filters.get("q")}], Meta(total=1, page=1, limit=10))


class TestContactForm:
    @pytest.mark.asyncio
    async def test_success_clears_draft(self, hub, contact_payload):
        form = ContactForm(hub)
        fill(form, contact_payload())
        assert await form.submit() is True
        assert form.state is FormState.SUCCESS
        assert form.draft == {"name": "", "email": "", "subject": "", "message": ""}
        assert form.receipt["message"].startswith("Thank you")

        form.reset()
        assert form.state is FormState.EDITING

    @pytest.mark.asyncio
    async def test_failure_keeps_draft(self, hub, contact_payload):
        form = ContactForm(hub)
        payload = contact_payload(message="too short")
        fill(form, payload)
        await form.submit()
        assert form.state is FormState.FAILED
        assert form.error == "Message must be at least 10 characters long"
        assert form.draft == payload

        form.set_field("message", "now long enough")
        await form.submit()
        assert form.state is FormState.SUCCESS
        assert form.error is None

    @pytest.mark.asyncio
    async def test_second_submit_while_submitting_is_ignored(self, contact_payload):
        client = GatedClient()
        form = ContactForm(client)
        fill(form, contact_payload())

        pending = asyncio.create_task(form.submit())
        await asyncio.sleep(0)
        assert form.state is FormState.SUBMITTING
        assert await form.submit() is False
        form.set_field("name", "Changed")
        assert form.draft["name"] == "Ada Lovelace"

        client.gates[0].set()
        assert await pending is True
        assert len(client.gates) == 1
        assert form.state is FormState.SUCCESS

    @pytest.mark.asyncio
    async def test_client_fault_moves_to_failed(self, hub, contact_payload):
        class BrokenClient:
            async def submit_contact(self, message):
                raise RuntimeError("connection reset")

        payload = contact_payload()
        form = ContactForm(BrokenClient())
        fill(form, payload)
        assert await form.submit() is True
        assert form.state is FormState.FAILED
        assert form.error == "Failed to send message. Please try again."
        assert form.draft == payload

        form.client = hub
        assert await form.submit() is True
        assert form.state is FormState.SUCCESS

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            ContactForm(client=None).set_field("phone", "123")


class TestToolBrowser:
    @pytest.mark.asyncio
    async def test_loads_tools(self, hub):
        browser = ToolBrowser(hub)
        assert await browser.search(category="ai") is True
        assert [t["name"] for t in browser.tools] == ["AI Code Reviewer"]
        assert browser.total == 1
        assert browser.loading is False

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self):
        client = GatedClient()
        browser = ToolBrowser(client)

        older = asyncio.create_task(browser.search(q="old"))
        await asyncio.sleep(0)
        newer = asyncio.create_task(browser.search(q="new"))
        await asyncio.sleep(0)

        client.gates[1].set()
        assert await newer is True
        client.gates[0].set()
        assert await older is False
        assert browser.tools == [{"name": "new"}]


async def instant(tool, server, prompt):
    return f"{tool}@{server}"


class TestPlayground:
    def test_starts_with_system_message(self):
        playground = Playground(dispatcher=instant)
        assert [m.type for m in playground.messages] == [MessageType.SYSTEM]

    @pytest.mark.asyncio
    async def test_send_appends_user_and_assistant(self):
        playground = Playground(dispatcher=instant)
        reply = await playground.send("find docs")
        assert [m.type for m in playground.messages] == [
            MessageType.SYSTEM, MessageType.USER, MessageType.ASSISTANT,
        ]
        assert playground.messages[1].content == "find docs"
        assert 'processed your request: "find docs"' in reply.content
        assert [(t.tool, t.server, t.status) for t in reply.tool_calls] == [
            ("search", "exa", TaskStatus.SUCCEEDED),
            ("fetch_docs", "docs", TaskStatus.SUCCEEDED),
        ]
        assert reply.tool_calls[0].output == "search@exa"
        assert playground.is_processing is False

    @pytest.mark.asyncio
    async def test_blank_message_is_ignored(self):
        playground = Playground(dispatcher=instant)
        assert await playground.send("   ") is None
        assert len(playground.messages) == 1

    @pytest.mark.asyncio
    async def test_send_while_processing_is_ignored(self):
        release = asyncio.Event()

        async def blocked(tool, server, prompt):
            await release.wait()
            return "done"

        playground = Playground(dispatcher=blocked)
        first = asyncio.create_task(playground.send("one"))
        await asyncio.sleep(0)
        assert playground.is_processing is True
        assert await playground.send("two") is None

        release.set()
        await first
        assert [m.content for m in playground.messages if m.type is MessageType.USER] == ["one"]

    @pytest.mark.asyncio
    async def test_timeout_and_retries_come_from_config(self):
        async def slow(tool, server, prompt):
            await asyncio.sleep(1)
            return "late"

        config = PlaygroundConfig(tool_execution_timeout=10, tool_call_retries=1)
        playground = Playground(dispatcher=slow, config=config, plan=[("search", "exa")])
        reply = await playground.send("hurry")
        task = reply.tool_calls[0]
        assert task.status is TaskStatus.FAILED
        assert task.attempts == 2
        assert "timed out" in task.error
        assert "Some tool calls failed: search (exa)." in reply.content

    @pytest.mark.asyncio
    async def test_failed_attempt_is_retried(self):
        calls = []

        async def flaky(tool, server, prompt):
            calls.append(tool)
            if len(calls) == 1:
                raise RuntimeError("server busy")
            return "ok"

        playground = Playground(dispatcher=flaky, plan=[("search", "exa")])
        task = (await playground.send("go")).tool_calls[0]
        assert task.status is TaskStatus.SUCCEEDED
        assert task.attempts == 2
        assert task.error is None

    @pytest.mark.asyncio
    async def test_simulated_dispatcher(self):
        playground = Playground(dispatcher=SimulatedDispatcher(latency=0))
        reply = await playground.send_prompt(1)
        assert playground.messages[1].content == "Connect to exa and find recent articles and research"
        assert all(t.status is TaskStatus.SUCCEEDED for t in reply.tool_calls)

    def test_update_config_validates(self):
        playground = Playground(dispatcher=instant)
        assert playground.update_config(tool_call_retries=5).tool_call_retries == 5
        with pytest.raises(ValueError):
            playground.update_config(connection_timeout=0)
