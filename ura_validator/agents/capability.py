"""Text-completion capabilities backing AI-assisted validation."""

from __future__ import annotations

from typing import Protocol

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_xai import ChatXAI


class CompletionCapability(Protocol):
    async def complete(
        self,
        prompt: str,
        *,
        system: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        ...


class XAICompletionCapability:
    """Grok completions through LangChain's xAI chat model."""

    def __init__(self, *, api_key: str, model: str = "grok-2-latest") -> None:
        self.model = model
        self.llm = ChatXAI(
            model=model,
            api_key=api_key,
        )

    async def complete(
        self,
        prompt: str,
        *,
        system: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        messages = [
            SystemMessage(content=system),
            HumanMessage(content=prompt),
        ]
        response = await self.llm.bind(temperature=temperature, max_tokens=max_tokens).ainvoke(messages)
        return str(response.content)


__all__ = ["CompletionCapability", "XAICompletionCapability"]
