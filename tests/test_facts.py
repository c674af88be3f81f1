"""Tests for geostats.core.facts – the fun-fact client."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
import requests

from geostats.core.catalog import Language
from geostats.core.facts import FactService, build_prompt


class _FakeResponse:
    def __init__(self, payload: Any = None, status_error: Optional[Exception] = None) -> None:
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self) -> None:
        if self._status_error is not None:
            raise self._status_error

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeHttp:
    """Records POST calls and answers with a canned response or error."""

    def __init__(self, response: Optional[_FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def _payload(*texts: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": t} for t in texts]}}]}


# ---------------------------------------------------------------------------
# build_prompt
# ---------------------------------------------------------------------------

class TestBuildPrompt:
    def test_portuguese(self, countries):
        prompt = build_prompt(countries["Japão"], Language.PT)
        assert "Japão" in prompt
        assert "em Português" in prompt

    def test_english(self, countries):
        prompt = build_prompt(countries["Japão"], Language.EN)
        assert "Japan" in prompt
        assert "in English" in prompt


# ---------------------------------------------------------------------------
# FactService.fetch_fact
# ---------------------------------------------------------------------------

class TestFetchFact:
    def test_success(self, countries):
        http = _FakeHttp(_FakeResponse(_payload("Brazil has ", "the largest rainforest. ")))
        service = FactService("key-123", model="test-model", timeout=3.0, http=http)
        assert service.fetch_fact(countries["Brasil"], Language.EN) == "Brazil has the largest rainforest."

        call = http.calls[0]
        assert "test-model:generateContent" in call["url"]
        assert call["headers"] == {"x-goog-api-key": "key-123"}
        assert call["timeout"] == 3.0
        assert "Brazil" in call["json"]["contents"][0]["parts"][0]["text"]

    def test_missing_key_disables(self, countries):
        http = _FakeHttp(_FakeResponse(_payload("unused")))
        service = FactService(None, http=http)
        assert service.fetch_fact(countries["Brasil"], Language.PT) == ""
        assert http.calls == []

    def test_network_error(self, countries):
        http = _FakeHttp(error=requests.ConnectionError("offline"))
        service = FactService("key", http=http)
        assert service.fetch_fact(countries["Brasil"], Language.PT) == ""

    def test_http_error(self, countries):
        http = _FakeHttp(_FakeResponse(_payload("x"), status_error=requests.HTTPError("403")))
        assert FactService("key", http=http).fetch_fact(countries["Brasil"], Language.PT) == ""

    def test_invalid_json(self, countries):
        http = _FakeHttp(_FakeResponse(ValueError("not json")))
        assert FactService("key", http=http).fetch_fact(countries["Brasil"], Language.PT) == ""

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": [None]}}]},
            [],
        ],
    )
    def test_unexpected_shape(self, countries, payload: Any):
        http = _FakeHttp(_FakeResponse(payload))
        assert FactService("key", http=http).fetch_fact(countries["Brasil"], Language.PT) == ""

    def test_default_transport_is_per_call(self, countries, monkeypatch: pytest.MonkeyPatch):
        http = _FakeHttp(_FakeResponse(_payload("Fact.")))
        monkeypatch.setattr(requests, "post", http.post)

        def _no_shared_session(*args: Any, **kwargs: Any) -> None:
            raise AssertionError("fetches must not share a requests.Session")

        monkeypatch.setattr(requests, "Session", _no_shared_session)
        service = FactService("key")
        assert service.fetch_fact(countries["Brasil"], Language.PT) == "Fact."
        assert service.fetch_fact(countries["Japão"], Language.EN) == "Fact."
        assert len(http.calls) == 2

    def test_missing_key_logs_warning(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level("WARNING"):
            FactService("", http=_FakeHttp())
        assert "Fun facts will be disabled" in caplog.text
