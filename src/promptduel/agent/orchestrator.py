"""Conversation orchestrator for iterative tool use."""

import asyncio
import logging
import time
from typing import Optional

from promptduel.agent.chunker import StreamCallback, StreamChunker
from promptduel.agent.extractors import IntentExtractor, IntentExtractorChain
from promptduel.agent.models import (
    OrchestrationResult,
    OrchestratorConfig,
    OrchestratorState,
    StopReason,
)
from promptduel.events.bus import StatusEventBus
from promptduel.events.models import EventStatus, SystemLevel, TokenCounts
from promptduel.providers.client import CompletionClient
from promptduel.providers.exceptions import MissingCredentialError, to_provider_error
from promptduel.providers.models import Message, TokenUsage
from promptduel.settings.models import DEFAULT_SYSTEM_PROMPT, ModelSettings
from promptduel.settings.store import SettingsProvider
from promptduel.tools.context import ExecutionContext
from promptduel.tools.models import ToolCall, ToolExecutionResult
from promptduel.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ConversationOrchestrator:
    """Drives one conversation turn through the completion endpoint and tools.

    Each run:
    1. Calls the model with the registered tool definitions
    2. Extracts tool-call intents from the response
    3. Executes the requested tools concurrently and feeds results back
    4. Repeats until the model answers in text or the iteration cap is hit
    5. Streams the final text to the caller in small chunks

    Model settings are read from the settings provider at the start of every
    run, so changes made between runs take effect immediately.
    """

    def __init__(
        self,
        client: CompletionClient,
        registry: ToolRegistry,
        bus: StatusEventBus,
        settings_provider: SettingsProvider,
        context: Optional[ExecutionContext] = None,
        config: Optional[OrchestratorConfig] = None,
        extractor: Optional[IntentExtractor] = None,
        chunker: Optional[StreamChunker] = None,
    ):
        """Initialize the orchestrator.

        Args:
            client: CompletionClient used for model calls
            registry: ToolRegistry with the tools offered to the model
            bus: StatusEventBus receiving telemetry
            settings_provider: Source of model settings
            context: ExecutionContext handed to tool executors
                     (defaults to the built-in resources)
            config: OrchestratorConfig with loop and streaming settings
            extractor: Intent extractor (defaults to structured, then pattern)
            chunker: Stream chunker (defaults to one built from config)
        """
        self.client = client
        self.registry = registry
        self.bus = bus
        self.settings_provider = settings_provider
        self.context = context or ExecutionContext.with_builtin_resources()
        self.config = config or OrchestratorConfig()
        self.extractor = extractor or IntentExtractorChain()
        self.chunker = chunker or StreamChunker(
            target_chunks=self.config.chunk_count,
            delay=self.config.chunk_delay,
        )
    async def run(
        self,
        messages: list[Message],
        on_stream: Optional[StreamCallback] = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        run_label: Optional[str] = None,
    ) -> OrchestrationResult:
        """Run one conversation turn.

        Args:
            messages: Conversation so far, without the system message
            on_stream: Callback receiving chunks of the final answer
            system_prompt: System prompt placed first in the history
            run_label: Label copied onto emitted events (e.g. "A" or "B")

        Returns:
            OrchestrationResult with the final content and execution details

        Raises:
            MissingCredentialError: If no API key is configured
            ProviderError: If the completion endpoint fails
        """
        settings = self.settings_provider.get_model_settings()
        if not settings.has_api_key:
            raise MissingCredentialError()

        history = [Message.system(system_prompt), *messages]
        start = time.monotonic()
        self._emit_request(settings, history, EventStatus.STARTED, run_label)

        state = OrchestratorState.AWAITING_MODEL
        iterations = 0
        content = ""
        stopped_reason = StopReason.MAX_ITERATIONS
        all_tool_calls: list[ToolCall] = []
        all_tool_results: list[ToolExecutionResult] = []
        usage = TokenUsage()
        tools = self.registry.get_definitions() or None

        try:
            while iterations < self.config.max_iterations:
                iterations += 1
                state = _transition(state, OrchestratorState.AWAITING_MODEL, run_label)
                logger.debug(f"[{run_label or '-'}] iteration {iterations}/{self.config.max_iterations}")

                response = await self.client.complete(history, tools, settings)
                usage.add(response.usage)

                tool_calls = self.extractor.extract(response)
                if not tool_calls:
                    state = _transition(state, OrchestratorState.TERMINAL, run_label)
                    stopped_reason = StopReason.COMPLETED
                    content = response.content
                    if content:
                        await self.chunker.deliver(content, on_stream)
                        self.bus.emit_stream(
                            content=content, is_complete=True, run_label=run_label
                        )
                    break

                state = _transition(state, OrchestratorState.TOOL_DISPATCH, run_label)
                logger.info(f"Model requested {len(tool_calls)} tool calls")
                history.append(
                    Message.assistant(
                        response.content, [call.to_dict() for call in tool_calls]
                    )
                )

                results = await self._execute_tool_calls(tool_calls, run_label)
                all_tool_calls.extend(tool_calls)
                all_tool_results.extend(results)

                for call, result in zip(tool_calls, results):
                    history.append(Message.tool(result.to_content(), call.id))

            if stopped_reason == StopReason.MAX_ITERATIONS:
                state = _transition(state, OrchestratorState.TERMINAL, run_label)
                message = f"Stopped after reaching the maximum of {self.config.max_iterations} iterations"
                logger.warning(message)
                self.bus.emit_system(
                    message,
                    level=SystemLevel.WARN,
                    details={"iterations": iterations, "run_label": run_label},
                )

        except Exception as e:
            _transition(state, OrchestratorState.TERMINAL, run_label)
            error = to_provider_error(e)
            self._emit_request(
                settings,
                history,
                EventStatus.FAILED,
                run_label,
                duration=_elapsed_ms(start),
                error=str(error),
            )
            if error is e:
                raise
            raise error from e

        duration_ms = _elapsed_ms(start)
        self._emit_request(
            settings,
            history,
            EventStatus.COMPLETED,
            run_label,
            duration=duration_ms,
            tokens=TokenCounts(
                prompt=usage.input_tokens,
                completion=usage.output_tokens,
                total=usage.total_tokens,
            ),
        )

        return OrchestrationResult(
            content=content,
            iterations=iterations,
            stopped_reason=stopped_reason,
            tool_calls=all_tool_calls,
            tool_results=all_tool_results,
            duration_ms=duration_ms,
            messages=history,
            usage=usage,
            state=state,
        )

    async def _execute_tool_calls(
        self, tool_calls: list[ToolCall], run_label: Optional[str]
    ) -> list[ToolExecutionResult]:
        """Execute tool calls concurrently.

        Returns:
            Results in the same order as ``tool_calls``
        """
        results = await asyncio.gather(
            *[self._execute_single_tool(call, run_label) for call in tool_calls]
        )
        return list(results)

    async def _execute_single_tool(
        self, tool_call: ToolCall, run_label: Optional[str]
    ) -> ToolExecutionResult:
        """Execute one tool call and report it on the bus."""
        arguments = tool_call.parse_arguments()
        self.bus.emit_tool_call(
            tool_call_id=tool_call.id,
            tool_name=tool_call.name,
            arguments=arguments,
            status=EventStatus.STARTED,
            run_label=run_label,
        )
        start = time.monotonic()

        tool = self.registry.get(tool_call.name)
        if tool is None:
            logger.warning(f"Tool not found: {tool_call.name}")
            result = ToolExecutionResult.fail(
                f"Unknown tool: {tool_call.name}",
                availableTools=self.registry.list_tool_names(),
            )
        else:
            result = await tool.executor.execute(arguments, self.context)

        self.bus.emit_tool_call(
            tool_call_id=tool_call.id,
            tool_name=tool_call.name,
            arguments=arguments,
            status=EventStatus.COMPLETED if result.success else EventStatus.FAILED,
            duration=_elapsed_ms(start),
            result=result.model_dump(exclude_none=True),
            error=result.error,
            run_label=run_label,
        )
        return result

    def _emit_request(
        self,
        settings: ModelSettings,
        history: list[Message],
        status: EventStatus,
        run_label: Optional[str],
        duration: Optional[float] = None,
        error: Optional[str] = None,
        tokens: Optional[TokenCounts] = None,
    ) -> None:
        self.bus.emit_api_request(
            model=settings.model_name,
            messages=[{"role": m.role, "content": m.content} for m in history],
            settings={"temperature": settings.temperature, "top_p": settings.top_p},
            status=status,
            duration=duration,
            error=error,
            tokens=tokens,
            run_label=run_label,
        )


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000


def _transition(
    current: OrchestratorState, new: OrchestratorState, run_label: Optional[str]
) -> OrchestratorState:
    if new != current:
        logger.debug(f"[{run_label or '-'}] {current.value} -> {new.value}")
    return new
