"""
/**
 * @file polytranslate/services/backends/__init__.py
 * @description 翻译后端导出。
 */
"""

from .base import HttpBackend, TranslateOptions, TranslationBackend
from .google import GoogleBackend
from .jsontt_cli import JsonttCliBackend
from .libretranslate import LibreTranslateBackend
from .mymemory import MyMemoryBackend

__all__ = [
    "TranslationBackend",
    "HttpBackend",
    "TranslateOptions",
    "GoogleBackend",
    "LibreTranslateBackend",
    "MyMemoryBackend",
    "JsonttCliBackend",
]
