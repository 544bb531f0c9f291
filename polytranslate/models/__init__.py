"""
/**
 * @file polytranslate/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .translate_request_model import TranslateMultipleRequest, TranslationRequest
from .translation_result_model import KeyStatus, LanguageReport, MultiTranslationResult, TranslationAttempt

__all__ = [
    "TranslateMultipleRequest",
    "TranslationRequest",
    "TranslationAttempt",
    "KeyStatus",
    "LanguageReport",
    "MultiTranslationResult",
]
