from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

import httpx

from tommbi.core.models import Dataset
from tommbi.core.state import Language
from tommbi.i18n import t
from tommbi.metrics.aggregate import sum_of
from tommbi.settings import DEFAULT_CHAT_ENDPOINT, DEFAULT_CHAT_MODEL, Settings

logger = logging.getLogger(__name__)


class ChatServiceError(RuntimeError):
    """The text-generation service could not produce a reply."""


def build_context(dataset: Dataset) -> str:
    """Bounded plain-text summary of the dataset for the model prompt."""
    lines: list[str] = []
    lines.append("Factories:")
    for f in dataset.factories:
        lines.append(f"- {f.name} (id {f.id}, type {f.type.value})")
    lines.append("Products:")
    for p in dataset.products:
        lines.append(f"- {p.name} (made by {p.factory_type.value} factories)")

    lines.append("Metric categories (daily records):")
    for key, records in dataset.streams().items():
        lines.append(f"- {key}: {len(records)} records")

    span = dataset.date_range()
    if span:
        lines.append(f"Coverage: {span[0]} to {span[1]}")

    lines.append(
        "Totals: production {:,.0f} tons, revenue ${:,.0f}, net profit ${:,.0f}, energy {:,.0f} MWh".format(
            sum_of(dataset.production, "actual"),
            sum_of(dataset.finance, "revenue"),
            sum_of(dataset.finance, "net_profit"),
            sum_of(dataset.energy, "energy_consumption_kwh") / 1000.0,
        )
    )
    return "\n".join(lines)


def build_prompt(context: str, question: str, language: Language) -> str:
    reply_in = "Persian (Farsi)" if language is Language.FA else "English"
    return (
        "You are an analytics assistant for the TOMM industrial group BI dashboard "
        "(coal & coke and ferroalloy factories).\n"
        f"Answer concisely in {reply_in}, using only the data summary below.\n\n"
        f"Data summary:\n{context}\n\n"
        f"Question: {question.strip()}"
    )


def extract_text(payload: dict) -> str:
    """Pull the reply text out of a generateContent response body."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(str(p.get("text") or "") for p in parts)
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise ChatServiceError(f"Malformed response: {exc!r}") from exc
    if not text.strip():
        raise ChatServiceError("Empty response")
    return text.strip()


class GenerativeClient:
    """Minimal async client for a generateContent-style text endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str = DEFAULT_CHAT_MODEL,
        endpoint: str = DEFAULT_CHAT_ENDPOINT,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerativeClient":
        return cls(
            api_key=settings.chat_api_key,
            model=settings.chat_model,
            endpoint=settings.chat_endpoint,
            timeout=settings.chat_timeout_seconds,
        )

    @property
    def url(self) -> str:
        return self.endpoint.format(model=self.model)

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ChatServiceError("Chat API key is not configured")
        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            url = self.url
        except (KeyError, IndexError, ValueError) as exc:
            raise ChatServiceError(f"Bad endpoint template {self.endpoint!r}: {exc!r}") from exc
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(url, params={"key": self.api_key}, json=body)
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise ChatServiceError(f"Service error {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise ChatServiceError(f"Service unreachable: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ChatServiceError(f"Request failed: {exc}") from exc
        except ValueError as exc:
            raise ChatServiceError(f"Invalid JSON: {exc}") from exc
        return extract_text(payload)


@dataclass
class ChatMessage:
    role: str  # "user" | "assistant"
    text: str

    def to_dict(self) -> dict:
        return {"role": self.role, "text": self.text}


def messages_from_records(records) -> list[ChatMessage]:
    """Rebuild a transcript from stored {"role", "text"} dicts, skipping anything malformed."""
    messages: list[ChatMessage] = []
    for rec in records or []:
        if not isinstance(rec, dict):
            continue
        role, text = rec.get("role"), rec.get("text")
        if role in ("user", "assistant") and isinstance(text, str):
            messages.append(ChatMessage(role=role, text=text))
    return messages


@dataclass
class ChatSession:
    """Transcript of one client's conversation.

    At most one request is in flight; `pending` is True while it is.
    """

    client: GenerativeClient
    dataset: Dataset
    messages: list[ChatMessage] = field(default_factory=list)
    pending: bool = False
    on_update: Callable[[], None] | None = None

    def records(self) -> list[dict]:
        """Transcript as plain dicts, suitable for per-client storage."""
        return [m.to_dict() for m in self.messages]

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update()

    async def ask(self, question: str, language: Language) -> ChatMessage | None:
        question = str(question or "").strip()
        if not question or self.pending:
            return None

        self.pending = True
        self.messages.append(ChatMessage(role="user", text=question))
        self._notify()
        try:
            prompt = build_prompt(build_context(self.dataset), question, language)
            text = await self.client.generate(prompt)
        except ChatServiceError as exc:
            logger.warning("Chat request failed: %s", exc)
            text = t("chat.fallback", language)
        except Exception:
            logger.exception("Unexpected chat failure")
            text = t("chat.fallback", language)
        finally:
            self.pending = False

        reply = ChatMessage(role="assistant", text=text)
        self.messages.append(reply)
        self._notify()
        return reply
