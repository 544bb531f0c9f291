"""
/**
 * @file polytranslate/services/backends/libretranslate.py
 * @description LibreTranslate 后端。
 */
"""

from __future__ import annotations

from typing import Optional

import requests

from polytranslate.services.exceptions import BackendInvocationError

from .base import HttpBackend, TranslateOptions

LIBRETRANSLATE_URL = "https://libretranslate.com/translate"


class LibreTranslateBackend(HttpBackend):
    name = "libre"
    description = "LibreTranslate /translate endpoint"

    def __init__(self, endpoint: str = LIBRETRANSLATE_URL, api_key: Optional[str] = None, session: Optional[requests.Session] = None):
        super().__init__(endpoint, session=session)
        self.api_key = api_key

    def translate(self, text: str, source: str, target: str, options: Optional[TranslateOptions] = None) -> str:
        opts = options or TranslateOptions()
        payload = {"q": text, "source": source or "auto", "target": target, "format": "text"}
        if self.api_key:
            payload["api_key"] = self.api_key
        data = self._request("POST", opts, json=payload)
        if not isinstance(data, dict) or "translatedText" not in data:
            message = data.get("error") if isinstance(data, dict) else None
            raise BackendInvocationError(message or "Missing 'translatedText'", backend=self.name)
        return data["translatedText"]
