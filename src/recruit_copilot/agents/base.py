"""Shared orchestration for every agent.

An agent is a plain ``AgentSpec``: fixed instructions, an input formatter and
an output parser. ``run_agent`` drives one invocation through

    Idle -> PromptBuilt -> MessageSent -> ResponseReceived -> Parsed -> Completed | Failed

Provider failures propagate. Replies that cannot be parsed are absorbed into
the agent's degraded default record.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.errors import JsonParseError
from recruit_copilot.language import DetectedLanguage, LanguageDetector
from recruit_copilot.models.chat import ChatMessage, ChatOptions, system, user
from recruit_copilot.utils.json_parser import find_json

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_DETECTOR = LanguageDetector()


class AgentStage(str, Enum):
    IDLE = "idle"
    PROMPT_BUILT = "prompt_built"
    MESSAGE_SENT = "message_sent"
    RESPONSE_RECEIVED = "response_received"
    PARSED = "parsed"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class JsonOutputParser(Generic[ModelT]):
    """Parse a reply into ``model``; fall back to ``fallback(raw)`` on any mismatch."""

    model: type[ModelT]
    fallback: Callable[[str], ModelT]
    postprocess: Callable[[ModelT], ModelT] | None = None

    def __call__(self, text: str) -> ModelT:
        return self.from_data(find_json(text), text)

    def from_data(self, data: Any, raw: str) -> ModelT:
        if not isinstance(data, dict):
            logger.warning("%s: reply is not a JSON object, using default", self.model.__name__)
            return self.fallback(raw)
        try:
            output = self.model.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                "%s: reply did not match schema (%d errors), using default",
                self.model.__name__,
                exc.error_count(),
            )
            return self.fallback(raw)
        return self.postprocess(output) if self.postprocess else output


@dataclass(frozen=True)
class AgentSpec(Generic[InputT, OutputT]):
    name: str
    instructions: str
    format_input: Callable[[InputT], str]
    parse_output: Callable[[str], OutputT]
    temperature: float = 0.7


def language_directive(
    locale_source: str | None = None,
    preferred_language: DetectedLanguage | None = None,
    *,
    detector: LanguageDetector = DEFAULT_DETECTOR,
    agent_name: str = "",
    correlation_id: str | None = None,
) -> list[str]:
    """Prompt lines fixing the reply language. A user-selected language wins over detection."""
    if preferred_language is not None:
        logger.info(
            "%s: language=%s source=user-selected correlation_id=%s",
            agent_name,
            preferred_language.value,
            correlation_id,
        )
        return [
            detector.instruction_for_language(preferred_language),
            f"User selected language: {preferred_language.value}.",
        ]
    if locale_source:
        detected = detector.detect(locale_source)
        logger.info(
            "%s: language=%s source=auto correlation_id=%s",
            agent_name,
            detected.value,
            correlation_id,
        )
        return [detector.instruction_for_language(detected)]
    return []


def build_system_prompt(spec: AgentSpec, directive: Sequence[str]) -> str:
    return "\n\n".join([*directive, spec.instructions])


def _advance(spec: AgentSpec, stage: AgentStage, correlation_id: str | None) -> AgentStage:
    logger.debug("%s: %s correlation_id=%s", spec.name, stage.value, correlation_id)
    return stage


async def run_agent(
    spec: AgentSpec[InputT, OutputT],
    llm: LLMClient,
    payload: InputT,
    *,
    locale_source: str | None = None,
    preferred_language: DetectedLanguage | None = None,
    history: Sequence[ChatMessage] = (),
    correlation_id: str | None = None,
    model: str | None = None,
    json_mode: bool = False,
    detector: LanguageDetector = DEFAULT_DETECTOR,
) -> OutputT:
    """Run one agent invocation: build prompt, send, parse.

    ``locale_source`` is the text whose language the reply should follow (the
    job description, usually), never the whole payload. With ``json_mode`` the
    reply goes through LLMClient.chat_json and a JsonParseError becomes the
    parser's default record.
    """
    stage = _advance(spec, AgentStage.IDLE, correlation_id)
    logger.info("%s: start correlation_id=%s", spec.name, correlation_id)

    directive = language_directive(
        locale_source,
        preferred_language,
        detector=detector,
        agent_name=spec.name,
        correlation_id=correlation_id,
    )
    messages = [
        system(build_system_prompt(spec, directive)),
        *history,
        user(spec.format_input(payload)),
    ]
    stage = _advance(spec, AgentStage.PROMPT_BUILT, correlation_id)
    options = ChatOptions(
        temperature=spec.temperature,
        model_override=model,
        correlation_id=correlation_id,
    )

    try:
        stage = _advance(spec, AgentStage.MESSAGE_SENT, correlation_id)
        if json_mode:
            output = await _send_json(spec, llm, messages, options)
        else:
            text = await llm.chat(messages, options)
            stage = _advance(spec, AgentStage.RESPONSE_RECEIVED, correlation_id)
            output = spec.parse_output(text)
        stage = _advance(spec, AgentStage.PARSED, correlation_id)
    except Exception:
        _advance(spec, AgentStage.FAILED, correlation_id)
        logger.error(
            "%s: failed at %s correlation_id=%s", spec.name, stage.value, correlation_id,
            exc_info=True,
        )
        raise

    _advance(spec, AgentStage.COMPLETED, correlation_id)
    logger.info("%s: completed correlation_id=%s", spec.name, correlation_id)
    return output


async def _send_json(
    spec: AgentSpec[Any, OutputT],
    llm: LLMClient,
    messages: list[ChatMessage],
    options: ChatOptions,
) -> OutputT:
    try:
        data = await llm.chat_json(messages, options)
    except JsonParseError as exc:
        _advance(spec, AgentStage.RESPONSE_RECEIVED, options.correlation_id)
        logger.warning("%s: unparseable reply, returning default record", spec.name)
        return _fallback(spec, exc.text)
    _advance(spec, AgentStage.RESPONSE_RECEIVED, options.correlation_id)

    parser = spec.parse_output
    if isinstance(parser, JsonOutputParser):
        return parser.from_data(data, json.dumps(data, ensure_ascii=False))
    return parser(json.dumps(data, ensure_ascii=False))


def _fallback(spec: AgentSpec[Any, OutputT], raw: str) -> OutputT:
    parser = spec.parse_output
    if isinstance(parser, JsonOutputParser):
        return parser.fallback(raw)
    return parser(raw)
