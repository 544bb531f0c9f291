"""
/**
 * @file polytranslate/tests/test_validators.py
 * @description 请求校验单元测试。
 */
"""

import unittest

from polytranslate.config import Settings
from polytranslate.services.exceptions import ValidationError
from polytranslate.utils.validators import normalize_language, validate_translation_request

SETTINGS = Settings(raw={"translation": {"supported_languages": ["en", "es", "fr", "he", "zh-CN"]}})
MODULES = ["google2", "mymemory"]


def _validate(payload):
    return validate_translation_request(payload, SETTINGS, known_modules=MODULES)


class TestValidators(unittest.TestCase):
    def test_defaults(self):
        req = _validate({"data": {"a": "b"}, "toLanguages": ["es"]})
        self.assertEqual(req.source, "auto")
        self.assertEqual(req.to_languages, ["es"])
        self.assertIsNone(req.concurrency_limit)
        self.assertIsNone(req.module)

    def test_full_payload(self):
        req = _validate({
            "data": {"a": "b"},
            "toLanguages": ["ES", "fr", "es", "zh-cn", "iw"],
            "from": "en",
            "concurrencylimit": 4,
            "retryAttempts": 3,
            "minimumCompleteness": 0.9,
            "module": "mymemory",
        })
        self.assertEqual(req.to_languages, ["es", "fr", "zh-CN", "he"])
        self.assertEqual(req.source, "en")
        self.assertEqual(req.concurrency_limit, 4)
        self.assertEqual(req.retry_attempts, 3)
        self.assertEqual(req.minimum_completeness, 0.9)
        self.assertEqual(req.module, "mymemory")

    def test_rejections(self):
        bad = [
            None,
            [],
            {"toLanguages": ["es"]},
            {"data": "text", "toLanguages": ["es"]},
            {"data": {"a": "b"}},
            {"data": {"a": "b"}, "toLanguages": "es"},
            {"data": {"a": "b"}, "toLanguages": []},
            {"data": {"a": "b"}, "toLanguages": ["es", 3]},
            {"data": {"a": "b"}, "toLanguages": ["xx"]},
            {"data": {"a": "b"}, "toLanguages": ["es"], "from": "xx"},
            {"data": {"a": "b"}, "toLanguages": ["es"], "from": ""},
            {"data": {"a": "b"}, "toLanguages": ["es"], "concurrencylimit": 0},
            {"data": {"a": "b"}, "toLanguages": ["es"], "concurrencylimit": "3"},
            {"data": {"a": "b"}, "toLanguages": ["es"], "concurrencylimit": 1000},
            {"data": {"a": "b"}, "toLanguages": ["es"], "retryAttempts": True},
            {"data": {"a": "b"}, "toLanguages": ["es"], "minimumCompleteness": 1.5},
            {"data": {"a": "b"}, "toLanguages": ["es"], "module": "babelfish"},
        ]
        for payload in bad:
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError):
                    _validate(payload)

    def test_whole_number_floats_accepted(self):
        req = _validate({"data": {"a": "b"}, "toLanguages": ["es"], "concurrencylimit": 3.0, "retryAttempts": 2.0})
        self.assertEqual(req.concurrency_limit, 3)
        self.assertIsInstance(req.concurrency_limit, int)
        self.assertEqual(req.retry_attempts, 2)

        for payload in ({"concurrencylimit": 3.5}, {"retryAttempts": 0.0}, {"retryAttempts": float("nan")}):
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError):
                    _validate({"data": {"a": "b"}, "toLanguages": ["es"], **payload})

    def test_auto_is_case_insensitive(self):
        self.assertEqual(_validate({"data": {}, "toLanguages": ["es"], "from": "AUTO"}).source, "auto")

    def test_normalize_language(self):
        self.assertEqual(normalize_language(" iw "), "he")
        self.assertEqual(normalize_language("zh-tw"), "zh-TW")
        self.assertEqual(normalize_language("de"), "de")


if __name__ == "__main__":
    unittest.main()
