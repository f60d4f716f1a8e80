"""
Integration tests: both prompts, the tool loop and the event bus together.

Only the completion endpoint is faked; registry, executors, context,
orchestrator, chunker and bus are the real implementations.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from promptduel.agent import ComparisonSession, StopReason
from promptduel.events import EventStatus
from promptduel.providers import Message
from promptduel.settings import PromptSlot

pytestmark = pytest.mark.integration

ACOMPLETION = "promptduel.providers.client.acompletion"


def fake_endpoint(make_completion):
    """Endpoint that calls get_character_info once, then answers from the tool result."""

    async def acompletion(**kwargs):
        messages = kwargs["messages"]
        tool_messages = [m for m in messages if m["role"] == "tool"]
        if not tool_messages:
            user_text = [m for m in messages if m["role"] == "user"][-1]["content"]
            system_prompt = messages[0]["content"]
            call_id = f"call_{system_prompt}"
            arguments = json.dumps({"name": user_text}, ensure_ascii=False)
            return make_completion(tool_calls=[(call_id, "get_character_info", arguments)])

        payload = json.loads(tool_messages[-1]["content"])
        data = payload["data"]
        return make_completion(content=f"{data['name']}，{data['age']}岁，{data['occupation']}。")

    return AsyncMock(side_effect=acompletion)


@pytest.mark.asyncio
async def test_both_prompts_look_up_character(orchestrator, bus, make_completion):
    """Two parallel runs on 张三 each make one completed request and one completed tool call."""
    session = ComparisonSession(
        orchestrator, prompts={PromptSlot.A: "A", PromptSlot.B: "B"}
    )
    endpoint = fake_endpoint(make_completion)

    with patch(ACOMPLETION, new=endpoint):
        results = await session.send("张三")

    assert endpoint.await_count == 4

    for slot in PromptSlot:
        result = results[slot]
        assert result.stopped_reason == StopReason.COMPLETED
        assert result.iterations == 2
        assert result.content == "张三，28岁，软件工程师。"
        assert session.get_transcript(slot)[-1].content == result.content

        requests = [
            e
            for e in bus.get_events_by_type("api_request")
            if e.run_label == slot.value and e.status == EventStatus.COMPLETED
        ]
        assert len(requests) == 1

        tool_calls = [
            e
            for e in bus.get_events_by_type("tool_call")
            if e.run_label == slot.value and e.status == EventStatus.COMPLETED
        ]
        assert len(tool_calls) == 1
        assert tool_calls[0].tool_call_id == f"call_{slot.value}"
        assert tool_calls[0].result["data"]["name"] == "张三"

    stats = bus.get_stats()
    assert stats.api_requests == 4
    assert stats.tool_calls == 4
    assert stats.errors == 0


@pytest.mark.asyncio
async def test_unknown_character_is_reported_back(orchestrator, bus, make_completion):
    """A miss reaches the model as a failed tool result listing the known names."""
    seen_tool_content = []

    async def acompletion(**kwargs):
        tool_messages = [m for m in kwargs["messages"] if m["role"] == "tool"]
        if not tool_messages:
            return make_completion(
                tool_calls=[("call_1", "get_character_info", '{"name": "周八"}')]
            )
        seen_tool_content.append(json.loads(tool_messages[-1]["content"]))
        return make_completion(content="没有找到周八。")

    with patch(ACOMPLETION, new=AsyncMock(side_effect=acompletion)):
        result = await orchestrator.run([Message.user("周八是谁？")], run_label="A")

    assert result.content == "没有找到周八。"
    assert seen_tool_content[0]["success"] is False
    assert seen_tool_content[0]["data"]["availableCharacters"] == ["张三", "李四", "王五", "赵六", "孙七"]
    assert bus.get_events_by_type("tool_call")[-1].status == EventStatus.FAILED


@pytest.mark.asyncio
async def test_event_feed_subscribers_see_every_event(orchestrator, bus, make_completion):
    """A wildcard subscriber receives the same events the buffer records."""
    received = []
    bus.on("*", received.append)
    session = ComparisonSession(orchestrator, prompts={PromptSlot.A: "A", PromptSlot.B: "B"})

    with patch(ACOMPLETION, new=fake_endpoint(make_completion)):
        await session.send("李四")

    assert received == bus.get_recent_events(len(received))
    assert {e.type for e in received} >= {"api_request", "tool_call", "stream"}
