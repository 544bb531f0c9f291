"""
/**
 * @file polytranslate/models/translate_request_model.py
 * @description 多语言翻译请求模型（Pydantic）。
 */
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TranslateMultipleRequest(BaseModel):
    """Wire shape of ``POST /translate-multiple``. Types are checked by the validator."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: Any = None
    toLanguages: Any = None
    from_: Optional[Any] = Field(None, alias="from")
    concurrencylimit: Optional[Any] = None
    retryAttempts: Optional[Any] = None
    minimumCompleteness: Optional[Any] = None
    module: Optional[Any] = None


class TranslationRequest(BaseModel):
    """A validated request, ready for the orchestrator."""

    data: Dict[str, Any]
    to_languages: List[str]
    source: str = "auto"
    concurrency_limit: Optional[int] = None
    retry_attempts: Optional[int] = None
    minimum_completeness: Optional[float] = None
    module: Optional[str] = None
