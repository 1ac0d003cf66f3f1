"""Single-flight chat transcript driver."""
import logging
import time
import uuid
from typing import Callable, List, Optional

from omni_console.const import ASSISTANT_ROLE, DEFAULT_SYSTEM_PROMPT, SYSTEM_ROLE, USER_ROLE
from omni_console.providers.registry import ProviderRegistry
from omni_console.shared.models import AppSettings, Message, ModelOption


logger = logging.getLogger(__name__)


class ChatError(Exception):
    """Exception raised when a chat submission is rejected before generation."""
    pass


class EmptyPromptError(ChatError):
    pass


class SessionBusyError(ChatError):
    """Another generation is still in flight."""
    pass


class ModelNotSelectedError(ChatError):
    pass


class ProviderDisabledError(ChatError):
    pass


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatSession:
    """Keeps the transcript and allows exactly one generation at a time."""

    def __init__(self, registry: ProviderRegistry, system_prompt: str = DEFAULT_SYSTEM_PROMPT,
                 clock: Callable[[], int] = _now_ms):
        self.registry = registry
        self.system_prompt = system_prompt
        self._clock = clock
        self._messages: List[Message] = []
        self._generating = False

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def is_generating(self) -> bool:
        return self._generating

    def clear(self) -> None:
        self._messages = []

    def _replace(self, message_id: str, **changes) -> Message:
        for i, message in enumerate(self._messages):
            if message.id == message_id:
                self._messages[i] = message.model_copy(update=changes)
                return self._messages[i]
        raise KeyError(message_id)

    async def submit(self, content: str, model: Optional[ModelOption], settings: AppSettings) -> Message:
        """
        Send a user prompt and wait for the assistant answer.

        Args:
            content: User prompt.
            model: Selected model, None when nothing is selected.
            settings: Settings used for this request.

        Returns:
            The final assistant message, or a system-role message carrying the error.

        Raises:
            EmptyPromptError: If the prompt is blank.
            SessionBusyError: If a generation is already in flight.
            ModelNotSelectedError: If no model is selected.
            ProviderDisabledError: If the model's provider is disabled.
        """
        if not content.strip():
            raise EmptyPromptError("Message is empty")
        if self._generating:
            raise SessionBusyError("A response is still being generated")
        if model is None:
            raise ModelNotSelectedError("No model selected. Add or select a model first.")
        if not settings.config_for(model.provider).enabled:
            raise ProviderDisabledError(f"{model.provider.value} is disabled in settings")

        self._generating = True
        try:
            self._messages.append(Message(id=uuid.uuid4().hex, role=USER_ROLE, content=content, timestamp=self._clock()))
            placeholder = Message(
                id=uuid.uuid4().hex,
                role=ASSISTANT_ROLE,
                content="",
                timestamp=self._clock(),
                provider=model.provider,
                model=model.name,
            )
            self._messages.append(placeholder)

            try:
                result = await self.registry.generate(model, settings, content, self.system_prompt)
            except Exception as e:
                logger.warning(f"Chat generation failed for {model.provider.value}/{model.id}: {e}")
                return self._replace(placeholder.id, role=SYSTEM_ROLE, content=f"Error: {e}")

            logger.info(f"Chat answer from {model.provider.value}/{model.id} in {result.latency_ms}ms")
            return self._replace(placeholder.id, content=result.text, latency_ms=result.latency_ms)
        finally:
            self._generating = False
