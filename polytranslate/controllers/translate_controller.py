"""
/**
 * @file polytranslate/controllers/translate_controller.py
 * @description 多语言翻译控制器。
 */
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Response

from polytranslate.config import load_settings
from polytranslate.services import backend_names, resolve_backend_chain, translate_multiple
from polytranslate.services.exceptions import AggregateFailure, ValidationError
from polytranslate.utils.validators import validate_translation_request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/translate-multiple")
def translate(response: Response, payload: Any = Body(None)):
    settings = load_settings()
    try:
        req = validate_translation_request(payload, settings, known_modules=backend_names())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"error": e.message})

    backends = resolve_backend_chain(req.module, settings)
    try:
        result = translate_multiple(req, backends, settings=settings)
    except AggregateFailure as e:
        logger.error(f"Translation failed for every language: {e.details.get('errors')}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Translation failed", "details": e.message, "failure": e.details, "suggestions": e.suggestions},
        )
    except Exception as e:
        logger.exception("Translation error")
        raise HTTPException(status_code=500, detail={"error": "Translation failed", "details": str(e)})

    if result.failed_languages:
        response.status_code = 207
        message = f"Translations completed with failures for: {', '.join(result.failed_languages)}."
    else:
        message = "Translations completed successfully."
    return {"message": message, "output": result.output, "summary": result.summary()}
