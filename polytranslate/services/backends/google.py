"""
/**
 * @file polytranslate/services/backends/google.py
 * @description Google 公共翻译接口（gtx 客户端）。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from polytranslate.services.exceptions import BackendInvocationError

from .base import HttpBackend, TranslateOptions

logger = logging.getLogger(__name__)

GOOGLE_TRANSLATE_URL = "https://translate.googleapis.com/translate_a/single"


class GoogleBackend(HttpBackend):
    name = "google"
    description = "Google public translate endpoint (gtx client)"

    def __init__(self, endpoint: str = GOOGLE_TRANSLATE_URL, name: Optional[str] = None, session: Optional[requests.Session] = None):
        super().__init__(endpoint, session=session)
        if name:
            self.name = name

    def translate(self, text: str, source: str, target: str, options: Optional[TranslateOptions] = None) -> str:
        opts = options or TranslateOptions()
        params = {"client": "gtx", "sl": source or "auto", "tl": target, "dt": "t", "q": text}
        logger.debug(f"[{self.name}] {source}->{target}: {text[:40]!r}")
        data = self._request("GET", opts, params=params)
        return self._extract(data)

    def _extract(self, data: Any) -> str:
        # Response: [[["translated", "source", ...], ...], None, "detected", ...]
        try:
            segments = data[0]
            return "".join(seg[0] for seg in segments if seg and isinstance(seg[0], str))
        except (TypeError, IndexError, KeyError) as e:
            raise BackendInvocationError("Unexpected response layout", backend=self.name) from e
