"""
/**
 * @file polytranslate/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .file_utils import is_writable_dir, read_json, safe_dir_name, staging_area, write_json

__all__ = ["staging_area", "safe_dir_name", "read_json", "write_json", "is_writable_dir"]
