"""
/**
 * @file polytranslate/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .backend_registry_service import backend_names, build_backend, list_available_backends, resolve_backend_chain
from .translation_service import TranslationOrchestrator, translate_multiple

__all__ = [
    "TranslationOrchestrator",
    "translate_multiple",
    "backend_names",
    "build_backend",
    "list_available_backends",
    "resolve_backend_chain",
]
