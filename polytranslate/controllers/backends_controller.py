"""
/**
 * @file polytranslate/controllers/backends_controller.py
 * @description 翻译后端列表控制器。
 */
"""

from fastapi import APIRouter

from polytranslate.services import list_available_backends

router = APIRouter()


@router.get("/backends")
def list_backends():
    return list_available_backends()
