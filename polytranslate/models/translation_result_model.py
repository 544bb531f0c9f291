"""
/**
 * @file polytranslate/models/translation_result_model.py
 * @description 翻译结果模型：单次尝试、键级状态、语言级报告与汇总。
 */
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Terminal key states
ACCEPTED = "accepted"
FALLBACK = "fallback"
EXHAUSTED = "exhausted"

# Language / overall states
COMPLETED = "completed"
PARTIAL = "partial"
FAILED = "failed"
SUCCESS = "success"


@dataclass
class TranslationAttempt:
    language: str
    key: str
    source_text: str
    backend: str
    translated: Optional[str] = None
    error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and self.translated is not None


@dataclass
class KeyStatus:
    state: str = "pending"
    attempts: int = 0
    backend: Optional[str] = None
    duration_ms: float = 0.0
    error: Optional[str] = None
    value: Any = None

    def fold(self, attempt: TranslationAttempt) -> None:
        self.attempts += 1
        self.backend = attempt.backend
        self.duration_ms += attempt.duration_ms
        if attempt.ok:
            self.state = ACCEPTED
            self.value = attempt.translated
            self.error = None
        else:
            self.state = "attempted"
            self.error = attempt.error

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "status": self.state,
            "attempts": self.attempts,
            "backend": self.backend,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.error:
            out["error"] = self.error
        return out


@dataclass
class LanguageReport:
    language: str
    status: str = COMPLETED
    completeness: float = 1.0
    keys: Dict[str, KeyStatus] = field(default_factory=dict)
    output: Optional[Dict[str, Any]] = None

    @property
    def translated_count(self) -> int:
        return sum(1 for k in self.keys.values() if k.state == ACCEPTED)

    @property
    def failed_keys(self) -> List[str]:
        return [name for name, k in self.keys.items() if k.state != ACCEPTED]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "completeness": round(self.completeness, 4),
            "translated": self.translated_count,
            "total": len(self.keys),
            "failed_keys": self.failed_keys,
            "keys": {name: k.to_dict() for name, k in self.keys.items()},
        }


@dataclass
class MultiTranslationResult:
    status: str
    languages: Dict[str, LanguageReport]
    duration_ms: float = 0.0

    @property
    def output(self) -> Dict[str, Dict[str, Any]]:
        return {lang: r.output for lang, r in self.languages.items() if r.output is not None}

    @property
    def failed_languages(self) -> List[str]:
        return [lang for lang, r in self.languages.items() if r.status == FAILED]

    def summary(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "duration_ms": round(self.duration_ms, 2),
            "succeeded_languages": [lang for lang, r in self.languages.items() if r.status != FAILED],
            "failed_languages": self.failed_languages,
            "languages": {lang: r.to_dict() for lang, r in self.languages.items()},
        }
