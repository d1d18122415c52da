"""Chat backend abstraction for the interactive agent."""

from __future__ import annotations

from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from swarmthing.config import settings
from swarmthing.utils.logger import agent_logger

DEFAULT_CHAT_TEMPERATURE = 0.7


class ChatBackend(ABC):
    """Turns a conversation into the next assistant reply."""

    @abstractmethod
    def chat(self, messages: list[BaseMessage]) -> str:
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        pass


class LangChainChatBackend(ChatBackend):
    """Adapter over any langchain-core chat model."""

    def __init__(self, model: BaseChatModel, model_name: str | None = None) -> None:
        self.model = model
        self._model_name = model_name or getattr(model, "model_name", None) or type(
            model
        ).__name__

    def chat(self, messages: list[BaseMessage]) -> str:
        agent_logger.debug(
            "LLM request", model=self._model_name, messages=len(messages)
        )
        reply = self.model.invoke(messages)
        content = reply.content
        if isinstance(content, str):
            return content
        # multi-part content: keep the text parts
        parts = [
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        ]
        text = "".join(parts)
        return text or "Received non-text response"

    def get_model_name(self) -> str:
        return self._model_name


def create_default_backend(
    model: str | None = None,
    api_key: str | None = None,
    base_url: str | None = None,
) -> LangChainChatBackend:
    """ChatOpenAI configured from settings; explicit arguments win."""
    from langchain_openai import ChatOpenAI

    final_model = model or settings.model
    final_key = api_key or settings.openai_api_key
    if not final_key:
        raise ValueError(
            "OpenAI API key not configured. Set OPENAI_API_KEY or "
            "providers.openai.api_key in your config."
        )
    kwargs = {
        "model": final_model,
        "api_key": final_key,
        "temperature": DEFAULT_CHAT_TEMPERATURE,
    }
    if base_url or settings.openai_base_url:
        kwargs["base_url"] = base_url or settings.openai_base_url
    return LangChainChatBackend(ChatOpenAI(**kwargs), model_name=final_model)
