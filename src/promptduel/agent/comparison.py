"""Side-by-side comparison of two system prompts."""

import asyncio
import logging
from typing import Mapping, Optional

from promptduel.agent.models import OrchestrationResult
from promptduel.agent.orchestrator import ConversationOrchestrator
from promptduel.providers.models import Message
from promptduel.settings.models import PromptSlot

logger = logging.getLogger(__name__)

GREETINGS = {
    PromptSlot.A: "你好！我是使用提示词A的AI助手，有什么可以帮助你的吗？",
    PromptSlot.B: "你好！我是使用提示词B的AI助手，有什么可以帮助你的吗？",
}


class ComparisonSession:
    """Two transcripts answering the same user messages under different prompts.

    Each transcript starts with a greeting from the assistant. ``send``
    appends the user message and an empty assistant reply to both
    transcripts, then runs both orchestrations concurrently while the
    streamed chunks fill in the replies.
    """

    def __init__(
        self,
        orchestrator: ConversationOrchestrator,
        prompts: Optional[Mapping[PromptSlot, str]] = None,
    ):
        """Initialize the session.

        Args:
            orchestrator: Orchestrator shared by both transcripts
            prompts: System prompt per slot. When omitted, the prompts are
                     read from the orchestrator's settings provider on every send.
        """
        self.orchestrator = orchestrator
        self.prompts = dict(prompts) if prompts is not None else None
        self.transcripts: dict[PromptSlot, list[Message]] = {
            slot: [Message.assistant(GREETINGS[slot])] for slot in PromptSlot
        }
        self.last_error: Optional[str] = None

    def get_prompt(self, slot: PromptSlot) -> str:
        """System prompt used for a slot."""
        if self.prompts is not None:
            return self.prompts[slot]
        return self.orchestrator.settings_provider.get_prompt(slot)

    async def send(self, text: str) -> dict[PromptSlot, OrchestrationResult]:
        """Send one user message to both prompts.

        Args:
            text: User message; blank input is ignored

        Returns:
            Orchestration result per slot (empty if the input was blank)

        Raises:
            ProviderError: If either run fails. Assistant replies that
                received no content are removed from both transcripts.
        """
        if not text.strip():
            return {}

        self.last_error = None
        replies: dict[PromptSlot, Message] = {}
        requests: dict[PromptSlot, list[Message]] = {}

        for slot, transcript in self.transcripts.items():
            transcript.append(Message.user(text))
            requests[slot] = list(transcript)
            replies[slot] = Message.assistant("")
            transcript.append(replies[slot])

        def collector(slot: PromptSlot):
            def on_chunk(chunk: str) -> None:
                replies[slot].content += chunk

            return on_chunk

        slots = list(self.transcripts)
        try:
            results = await asyncio.gather(
                *[
                    self.orchestrator.run(
                        requests[slot],
                        on_stream=collector(slot),
                        system_prompt=self.get_prompt(slot),
                        run_label=slot.value,
                    )
                    for slot in slots
                ]
            )
        except Exception as e:
            self.last_error = str(e)
            logger.error(f"Comparison run failed: {e}")
            for slot in slots:
                reply = replies[slot]
                if not reply.content:
                    self.transcripts[slot] = [
                        msg for msg in self.transcripts[slot] if msg is not reply
                    ]
            raise

        return dict(zip(slots, results))

    def clear(self, slot: PromptSlot) -> None:
        """Reset one transcript to its greeting."""
        self.transcripts[slot] = [Message.assistant(GREETINGS[slot])]

    def get_transcript(self, slot: PromptSlot) -> list[Message]:
        """Copy of one transcript."""
        return list(self.transcripts[slot])
