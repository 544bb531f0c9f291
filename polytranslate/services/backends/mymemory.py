"""
/**
 * @file polytranslate/services/backends/mymemory.py
 * @description MyMemory 翻译后端。
 */
"""

from __future__ import annotations

from typing import Optional

import requests

from polytranslate.services.exceptions import BackendInvocationError

from .base import HttpBackend, TranslateOptions

MYMEMORY_URL = "https://api.mymemory.translated.net/get"


class MyMemoryBackend(HttpBackend):
    name = "mymemory"
    description = "MyMemory translation memory API"

    def __init__(self, endpoint: str = MYMEMORY_URL, session: Optional[requests.Session] = None):
        super().__init__(endpoint, session=session)

    def translate(self, text: str, source: str, target: str, options: Optional[TranslateOptions] = None) -> str:
        opts = options or TranslateOptions()
        src = "Autodetect" if not source or source == "auto" else source
        data = self._request("GET", opts, params={"q": text, "langpair": f"{src}|{target}"})
        if not isinstance(data, dict):
            raise BackendInvocationError("Unexpected response layout", backend=self.name)
        status = data.get("responseStatus")
        if status not in (200, "200"):
            raise BackendInvocationError(f"responseStatus {status}: {data.get('responseDetails')}", backend=self.name)
        translated = (data.get("responseData") or {}).get("translatedText")
        if not isinstance(translated, str):
            raise BackendInvocationError("Missing 'translatedText'", backend=self.name)
        return translated
