"""Fake upstream providers for tests."""

import json
from collections.abc import Callable
from typing import Any

import httpx

Responder = Callable[[httpx.Request], httpx.Response]


def completion(content: str, total_tokens: int | None = 42) -> dict[str, Any]:
    """Build an OpenAI-style chat-completions payload."""
    payload: dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
    if total_tokens is not None:
        payload["usage"] = {
            "prompt_tokens": 10,
            "completion_tokens": total_tokens - 10,
            "total_tokens": total_tokens,
        }
    return payload


def reply_with(content: str, total_tokens: int | None = 42) -> Responder:
    """Responder returning a successful completion."""
    return lambda request: httpx.Response(200, json=completion(content, total_tokens))


def fail_with(status_code: int, body: str = '{"error": {"message": "Invalid API Key"}}') -> Responder:
    """Responder returning an upstream error."""
    return lambda request: httpx.Response(status_code, text=body)


def unreachable(request: httpx.Request) -> httpx.Response:
    """Responder simulating a network failure."""
    raise httpx.ConnectError("Connection refused", request=request)


class UpstreamStub:
    """Fake provider endpoint that records every request it receives."""

    def __init__(self, responder: Responder) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)
