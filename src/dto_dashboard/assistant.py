"""Chat assistant: answers questions about one catalog record."""

import logging
import re
from dataclasses import dataclass, field
from typing import Literal

import httpx

from dto_dashboard.config import AssistantConfig
from dto_dashboard.errors import RemoteFetchError
from dto_dashboard.models import CatalogRecord

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a SMART AI DTO Analysis assistant. "
    "Answer user queries based on the DTO context provided."
)
NO_RESPONSE = "No response from AI."


def build_prompt(query: str, record: CatalogRecord) -> str:
    context = record.model_dump_json(exclude_none=True)
    return (
        "You are an expert technical writer. Given the following extracted technical "
        "parameters and any relevant text, be technical and concise.\n"
        f"DTO Context: {context}\n"
        f"User Query: {query}"
    )


def clean_text(text: str) -> str:
    """Strip markdown decoration from an answer for plain display."""
    text = re.sub(r"\s*---+\s*", "\n", text)
    text = re.sub(r"#+\s*", "", text)
    text = text.replace("**", "").replace("*", "").replace("|", " ")
    text = re.sub(r"\n{2,}", "\n", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


class AssistantClient:
    def __init__(
        self,
        config: AssistantConfig,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._timeout = timeout
        self._transport = transport

    @property
    def completions_url(self) -> str:
        base = self._config.ai_base_url.rstrip("/")
        return (
            f"{base}/openai/deployments/{self._config.ai_deployment}"
            f"/chat/completions?api-version={self._config.ai_api_version}"
        )

    async def ask(self, query: str, record: CatalogRecord) -> str:
        body = {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(query, record)},
            ],
            "max_tokens": 512,
            "temperature": 0.2,
            "top_p": 0.95,
            "frequency_penalty": 0,
            "presence_penalty": 0,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.post(
                    self.completions_url,
                    json=body,
                    headers={"api-key": self._config.ai_key},
                )
        except httpx.HTTPError as exc:
            raise RemoteFetchError(f"Failed to fetch AI response: {exc}") from exc

        if resp.is_error:
            logger.warning("Assistant error %s: %s", resp.status_code, resp.text)
            raise RemoteFetchError(
                f"Failed to fetch AI response: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteFetchError(f"Malformed AI response: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        return content or NO_RESPONSE


@dataclass
class ChatMessage:
    sender: Literal["user", "ai"]
    message: str


@dataclass
class ChatTranscript:
    """Session-local conversation about one document."""

    record_id: str
    messages: list[ChatMessage] = field(default_factory=list)

    async def send(self, assistant: AssistantClient, query: str, record: CatalogRecord) -> str:
        """Ask and record both sides; a failure is recorded as the reply, then re-raised."""
        self.messages.append(ChatMessage(sender="user", message=query))
        try:
            answer = await assistant.ask(query, record)
        except RemoteFetchError as exc:
            self.messages.append(ChatMessage(sender="ai", message=f"Error: {exc}"))
            raise
        self.messages.append(ChatMessage(sender="ai", message=answer))
        return answer
