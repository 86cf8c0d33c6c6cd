from __future__ import annotations

import io
import json

import httpx


class TerminalStream(io.StringIO):
    """Stdin stand-in that reports an interactive terminal."""

    def isatty(self) -> bool:
        return True

    def read(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        raise AssertionError("terminal stdin must not be read")

    def __iter__(self):  # type: ignore[no-untyped-def]
        raise AssertionError("terminal stdin must not be read")


def chat_transport(reply: str = "Test response from AI", captured: list | None = None) -> httpx.MockTransport:
    def _handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(
            200,
            json={"choices": [{"message": {"role": "assistant", "content": reply}}]},
        )

    return httpx.MockTransport(_handler)


def raw_transport(body: str, status_code: int = 200) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(status_code, content=body.encode()))


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)
