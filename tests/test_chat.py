from __future__ import annotations

import asyncio
from datetime import date

import httpx
import pytest

from tommbi.assistant.chat import (
    ChatServiceError,
    ChatSession,
    GenerativeClient,
    build_context,
    build_prompt,
    extract_text,
    messages_from_records,
)
from tommbi.core.state import Language
from tommbi.data.generator import generate_dataset
from tommbi.i18n import t


@pytest.fixture(scope="module")
def dataset():
    return generate_dataset(days=10, today=date(2024, 12, 31), seed=3)


def ok_payload(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_client(handler) -> GenerativeClient:
    return GenerativeClient(api_key="test-key", model="m1", transport=httpx.MockTransport(handler))


def test_build_context_lists_factories_and_streams(dataset):
    ctx = build_context(dataset)
    for f in dataset.factories:
        assert f.name in ctx
    assert "production: " in ctx
    assert "Coverage: 2024-12-22 to 2024-12-31" in ctx


def test_build_prompt_contains_question_and_language(dataset):
    prompt = build_prompt("ctx", "  What is OEE?  ", Language.FA)
    assert "Persian" in prompt
    assert prompt.endswith("Question: What is OEE?")


def test_extract_text_rejects_malformed_payloads():
    assert extract_text(ok_payload(" hi ")) == "hi"
    with pytest.raises(ChatServiceError):
        extract_text({"candidates": []})
    with pytest.raises(ChatServiceError):
        extract_text(ok_payload("   "))


def test_generate_posts_prompt_with_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read().decode("utf-8")
        return httpx.Response(200, json=ok_payload("answer"))

    client = make_client(handler)
    assert asyncio.run(client.generate("hello")) == "answer"
    assert "models/m1:generateContent" in seen["url"]
    assert "key=test-key" in seen["url"]
    assert "hello" in seen["body"]


def test_generate_without_key_raises():
    client = GenerativeClient(api_key="")
    with pytest.raises(ChatServiceError):
        asyncio.run(client.generate("hello"))


@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(500, json={"error": "boom"}),
        lambda request: httpx.Response(403, json={"error": "quota"}),
        lambda request: httpx.Response(200, content=b"not json"),
        lambda request: httpx.Response(200, json={"unexpected": True}),
    ],
)
@pytest.mark.parametrize("language", [Language.EN, Language.FA])
def test_failed_request_yields_single_fallback_message(dataset, handler, language):
    calls = []

    def counting(request):
        calls.append(request)
        return handler(request)

    session = ChatSession(client=make_client(counting), dataset=dataset)
    reply = asyncio.run(session.ask("How much coke did we make?", language))

    assert reply is not None
    assert reply.text == t("chat.fallback", language)
    assistant = [m for m in session.messages if m.role == "assistant"]
    assert assistant == [reply]
    assert session.pending is False
    # no retry
    assert len(calls) == 1


def test_network_error_yields_fallback(dataset):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    session = ChatSession(client=make_client(handler), dataset=dataset)
    reply = asyncio.run(session.ask("hi", Language.EN))
    assert reply.text == t("chat.fallback", Language.EN)
    assert session.pending is False


def test_successful_reply_is_appended(dataset):
    session = ChatSession(client=make_client(lambda r: httpx.Response(200, json=ok_payload("42 tons"))), dataset=dataset)
    reply = asyncio.run(session.ask("How much?", Language.EN))
    assert reply.text == "42 tons"
    assert [(m.role, m.text) for m in session.messages] == [("user", "How much?"), ("assistant", "42 tons")]


def test_empty_question_is_ignored(dataset):
    session = ChatSession(client=make_client(lambda r: httpx.Response(200, json=ok_payload("x"))), dataset=dataset)
    assert asyncio.run(session.ask("   ", Language.EN)) is None
    assert session.messages == []


def test_input_is_pending_while_request_in_flight(dataset):
    observed = []

    async def scenario():
        release = asyncio.Event()

        class SlowClient:
            async def generate(self, prompt: str) -> str:
                await release.wait()
                return "done"

        session = ChatSession(client=SlowClient(), dataset=dataset)
        session.on_update = lambda: observed.append(session.pending)

        first = asyncio.ensure_future(session.ask("first", Language.EN))
        await asyncio.sleep(0)
        assert session.pending is True
        # a second question while pending is rejected
        assert await session.ask("second", Language.EN) is None
        release.set()
        await first
        return session

    session = asyncio.run(scenario())
    assert session.pending is False
    assert [m.text for m in session.messages] == ["first", "done"]
    assert observed == [True, False]


def _undecodable(request: httpx.Request) -> httpx.Response:
    raise httpx.DecodingError("bad gzip", request=request)


@pytest.mark.parametrize(
    "client",
    [
        # template names a field that is never filled
        GenerativeClient(api_key="k", endpoint="https://example.com/{region}/{model}"),
        GenerativeClient(api_key="k", endpoint="not a url {model}"),
        GenerativeClient(api_key="k", transport=httpx.MockTransport(_undecodable)),
    ],
)
def test_any_client_failure_still_yields_fallback(dataset, client):
    updates = []
    session = ChatSession(client=client, dataset=dataset, on_update=lambda: updates.append(len(session.messages)))

    reply = asyncio.run(session.ask("hello", Language.FA))

    assert reply.text == t("chat.fallback", Language.FA)
    assert [m.role for m in session.messages] == ["user", "assistant"]
    assert session.pending is False
    assert updates == [1, 2]


def test_unexpected_error_in_client_yields_fallback(dataset):
    class BrokenClient:
        async def generate(self, prompt: str) -> str:
            raise RuntimeError("boom")

    session = ChatSession(client=BrokenClient(), dataset=dataset)
    reply = asyncio.run(session.ask("hello", Language.EN))
    assert reply.text == t("chat.fallback", Language.EN)
    assert session.pending is False


def test_bad_endpoint_template_raises_service_error():
    client = GenerativeClient(api_key="k", endpoint="https://example.com/{region}/{model}")
    with pytest.raises(ChatServiceError):
        asyncio.run(client.generate("hello"))


def test_transcript_survives_rebuild_from_records(dataset):
    store = {}
    first = ChatSession(client=make_client(lambda r: httpx.Response(200, json=ok_payload("9 furnaces"))), dataset=dataset)
    first.on_update = lambda: store.update(chat=first.records())
    asyncio.run(first.ask("How many furnaces?", Language.EN))
    assert store["chat"] == [
        {"role": "user", "text": "How many furnaces?"},
        {"role": "assistant", "text": "9 furnaces"},
    ]

    # a later page render starts a new session from the stored records
    second = ChatSession(
        client=make_client(lambda r: httpx.Response(200, json=ok_payload("x"))),
        dataset=dataset,
        messages=messages_from_records(store["chat"]),
    )
    assert [(m.role, m.text) for m in second.messages] == [("user", "How many furnaces?"), ("assistant", "9 furnaces")]


def test_messages_from_records_skips_malformed_entries():
    records = [{"role": "user", "text": "hi"}, {"role": "system", "text": "x"}, {"role": "assistant"}, "junk"]
    assert [(m.role, m.text) for m in messages_from_records(records)] == [("user", "hi")]
    assert messages_from_records(None) == []
