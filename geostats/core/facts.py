from __future__ import annotations

import logging
import textwrap
from typing import Optional

import requests

from geostats.core.catalog import CountryRecord, Language, localize

logger = logging.getLogger(__name__)

GEMINI_API = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


def build_prompt(country: CountryRecord, language: Language) -> str:
    name = localize(country.name, language)
    lang_prompt = "in English" if language is Language.EN else "em Português"
    return textwrap.dedent(
        f"""
        Tell me an ultra interesting and little known fun fact about {name} in one sentence {lang_prompt}.
        Focus on surprising statistics or culture.
        """
    ).strip()


def _extract_text(payload: dict) -> str:
    parts = payload["candidates"][0]["content"]["parts"]
    return "".join(str(part.get("text", "")) for part in parts).strip()


class FactService:
    """Fetches a one-sentence fun fact about a country from the Gemini API.

    Never raises: a missing API key disables the feature and any request or
    response problem yields an empty string.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        timeout: float = 10.0,
        http: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        # None: each call goes through requests.post, which opens its own Session.
        self._http = http
        if not api_key:
            logger.warning("API key not found. Fun facts will be disabled.")

    def fetch_fact(self, country: CountryRecord, language: Language) -> str:
        if not self._api_key:
            return ""
        body = {"contents": [{"parts": [{"text": build_prompt(country, language)}]}]}
        try:
            post = self._http.post if self._http is not None else requests.post
            response = post(
                GEMINI_API.format(model=self._model),
                json=body,
                headers={"x-goog-api-key": self._api_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
            return _extract_text(response.json())
        except requests.RequestException as e:
            logger.warning("Fun fact request for %s failed: %s", country.key, e)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.warning("Unexpected fun fact response for %s: %s", country.key, e)
        return ""
