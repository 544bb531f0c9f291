"""
/**
 * @file polytranslate/services/exceptions.py
 * @description 翻译服务异常体系。
 */
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class TranslationServiceError(Exception):
    """Base exception for the translation service."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TranslationServiceError):
    """Bad or missing request field, or an unsupported language code."""


class BackendInvocationError(TranslationServiceError):
    """A backend call raised, timed out, or returned something unusable."""

    def __init__(self, message: str, backend: Optional[str] = None):
        super().__init__(message)
        self.backend = backend

    def __str__(self) -> str:
        if self.backend:
            return f"[{self.backend}] {self.message}"
        return self.message


class BackendSentinelFailure(BackendInvocationError):
    """The backend answered with a placeholder meaning 'no translation'."""

    def __init__(self, value: str, backend: Optional[str] = None):
        super().__init__(f"Backend returned untranslated placeholder {value!r}", backend=backend)
        self.value = value


class AggregateFailure(TranslationServiceError):
    """No language produced an accepted translation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.details = details or {}
        self.suggestions = suggestions or []
