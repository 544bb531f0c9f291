"""
/**
 * @file polytranslate/tests/test_translate_controller.py
 * @description 多语言翻译控制器单元测试。
 */
"""

import json
import tempfile
import unittest
from unittest.mock import patch

from fastapi import HTTPException, Response

from polytranslate.config import Settings
from polytranslate.controllers.translate_controller import translate

from polytranslate.tests.stubs import StubBackend


class TestTranslateController(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.settings = Settings(raw={
            "translation": {
                "supported_languages": ["en", "es", "fr", "xx"],
                "retry_delay": 0,
                "retry_attempts": 2,
            },
            "jsontt": {"staging_dir": self._tmp.name},
        })
        p1 = patch("polytranslate.controllers.translate_controller.load_settings", return_value=self.settings)
        p1.start()
        self.addCleanup(p1.stop)

    def tearDown(self):
        self._tmp.cleanup()

    def _call(self, payload, backend):
        response = Response()
        with patch("polytranslate.controllers.translate_controller.resolve_backend_chain", return_value=[backend]) as chain:
            body = translate(response, payload)
        return response, body, chain

    def test_translate_success(self):
        backend = StubBackend(table={("hello", "es"): "hola"})
        response, body, _ = self._call({"data": {"greeting": "hello", "count": 3}, "toLanguages": ["es"]}, backend)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["output"], {"es": {"greeting": "hola", "count": 3}})
        self.assertEqual(body["message"], "Translations completed successfully.")
        self.assertEqual(body["summary"]["status"], "success")

    def test_partial_success_is_207(self):
        backend = StubBackend(table={("hello", "es"): "hola"}, fail_langs={"xx"})
        response, body, _ = self._call({"data": {"greeting": "hello"}, "toLanguages": ["es", "xx"]}, backend)

        self.assertEqual(response.status_code, 207)
        self.assertEqual(body["output"]["es"], {"greeting": "hola"})
        self.assertEqual(body["summary"]["failed_languages"], ["xx"])
        self.assertEqual(body["summary"]["languages"]["xx"]["keys"]["greeting"]["status"], "fallback")
        self.assertEqual(body["summary"]["languages"]["xx"]["keys"]["greeting"]["attempts"], 2)

    def test_empty_languages_is_400_without_backend_calls(self):
        backend = StubBackend()
        with self.assertRaises(HTTPException) as ctx:
            self._call({"data": {"a": "b"}, "toLanguages": []}, backend)

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIn("error", ctx.exception.detail)
        self.assertEqual(backend.calls, [])

    def test_unsupported_language_is_400(self):
        backend = StubBackend()
        with self.assertRaises(HTTPException) as ctx:
            self._call({"data": {"a": "b"}, "toLanguages": ["es", "klingon"]}, backend)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIn("klingon", ctx.exception.detail["error"])
        self.assertEqual(backend.calls, [])

    def test_all_languages_failed_is_500(self):
        backend = StubBackend(fail_langs={"es", "fr"})
        with self.assertRaises(HTTPException) as ctx:
            self._call({"data": {"a": "b"}, "toLanguages": ["es", "fr"]}, backend)

        self.assertEqual(ctx.exception.status_code, 500)
        detail = ctx.exception.detail
        self.assertEqual(detail["error"], "Translation failed")
        self.assertIn("details", detail)
        self.assertTrue(detail["suggestions"])

    def test_blank_value_is_200(self):
        backend = StubBackend(fail_langs={"es"})
        response, body, _ = self._call({"data": {"title": "", "n": 1}, "toLanguages": ["es"]}, backend)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["output"], {"es": {"title": "", "n": 1}})
        self.assertEqual(backend.calls, [])

    def test_whole_number_float_limits(self):
        response, body, _ = self._call(
            {"data": {"a": "b"}, "toLanguages": ["es"], "concurrencylimit": 3.0, "retryAttempts": 1.0}, StubBackend()
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["output"], {"es": {"a": "b [es]"}})

    def test_idempotent_output(self):
        payload = {"data": {"a": "one", "b": 2, "c": "three"}, "toLanguages": ["es", "fr"], "from": "en"}
        _, first, _ = self._call(payload, StubBackend())
        _, second, _ = self._call(payload, StubBackend())
        self.assertEqual(json.dumps(first["output"]), json.dumps(second["output"]))

    def test_module_passed_to_chain(self):
        backend = StubBackend()
        _, _, chain = self._call({"data": {"a": "b"}, "toLanguages": ["es"], "module": "mymemory"}, backend)
        chain.assert_called_once_with("mymemory", self.settings)


if __name__ == "__main__":
    unittest.main()
