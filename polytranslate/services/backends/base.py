"""
/**
 * @file polytranslate/services/backends/base.py
 * @description 翻译后端抽象：统一的 translate(text, source, target, options) 能力。
 */
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from polytranslate.services.exceptions import BackendInvocationError


@dataclass
class TranslateOptions:
    timeout: float = 15.0
    staging_dir: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


class TranslationBackend(ABC):
    name: str = "base"
    description: str = ""
    # Set when the backend exchanges files through TranslateOptions.staging_dir.
    requires_staging: bool = False

    @abstractmethod
    def translate(self, text: str, source: str, target: str, options: Optional[TranslateOptions] = None) -> str:
        """Return the translation of ``text`` or raise ``BackendInvocationError``."""

    def describe(self) -> Dict[str, Any]:
        return {"name": self.name, "kind": type(self).__name__, "description": self.description}


class HttpBackend(TranslationBackend):
    """Shared request handling for backends reached over HTTP."""

    def __init__(self, endpoint: str, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self._session = session

    def _request(self, method: str, options: TranslateOptions, **kwargs) -> Any:
        http = self._session or requests
        try:
            response = http.request(method, self.endpoint, timeout=options.timeout, **kwargs)
        except requests.Timeout as e:
            raise BackendInvocationError(f"Timed out after {options.timeout}s", backend=self.name) from e
        except requests.RequestException as e:
            raise BackendInvocationError(f"Request failed: {e}", backend=self.name) from e
        if response.status_code != 200:
            raise BackendInvocationError(
                f"HTTP {response.status_code}: {response.text[:200]}", backend=self.name
            )
        try:
            return response.json()
        except ValueError as e:
            raise BackendInvocationError("Malformed JSON response", backend=self.name) from e

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["endpoint"] = self.endpoint
        return info
