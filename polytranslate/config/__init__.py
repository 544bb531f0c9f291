"""
/**
 * @file polytranslate/config/__init__.py
 * @description 配置模块导出。
 */
"""

from .settings import Settings, load_settings, reload_settings, CONFIG_PATH, CONFIG_LOCAL_PATH
from .orchestrator_config import OrchestratorConfig

__all__ = ["Settings", "OrchestratorConfig", "load_settings", "reload_settings", "CONFIG_PATH", "CONFIG_LOCAL_PATH"]
