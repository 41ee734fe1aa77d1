"""Tests for the hint service HTTP client."""

import json

import httpx
import pytest

from codementor.models import HintLevel, SignalRequest
from codementor.services.hint_client import HintServiceClient

REQUEST = SignalRequest.model_validate(
    {
        "sessionId": "s1",
        "problemId": "leetcode_322",
        "signals": {"hasDPArray": False, "usesSort": True, "hasRecursion": False, "loopDepth": 1},
    }
)


def test_send_signal_posts_wire_payload_and_parses_hint():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"showHint": True, "level": "GENTLE", "message": "Check it."}
        )

    client = HintServiceClient(
        base_url="http://hints.test/", transport=httpx.MockTransport(handler)
    )

    response = client.send_signal(REQUEST)

    assert seen["url"] == "http://hints.test/api/signal"
    assert seen["body"] == {
        "sessionId": "s1",
        "problemId": "leetcode_322",
        "signals": {"hasDPArray": False, "usesSort": True, "hasRecursion": False, "loopDepth": 1},
    }
    assert response.show_hint is True
    assert response.level == HintLevel.GENTLE
    assert response.message == "Check it."


def test_send_signal_parses_no_hint():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"showHint": False}))

    with HintServiceClient(base_url="http://hints.test", transport=transport) as client:
        response = client.send_signal(REQUEST)

    assert response.show_hint is False
    assert response.level is None


def test_send_signal_raises_on_server_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    client = HintServiceClient(base_url="http://hints.test", transport=transport)

    with pytest.raises(httpx.HTTPStatusError):
        client.send_signal(REQUEST)
