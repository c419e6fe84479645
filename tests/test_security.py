import unittest

import jwt
from fastapi import HTTPException

from stock_engine.config import Settings
from stock_engine.core.security import bearer_token, configured_api_keys, resolve_user_id

SECRET = "test-secret-with-enough-bytes-for-hs256"


def _token(claims, secret=SECRET):
    return "Bearer {}".format(jwt.encode(claims, secret, algorithm="HS256"))


class SecurityTest(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(API_KEYS=" key-a, ,key-b ", JWT_SECRET=SECRET)

    def test_open_when_nothing_configured(self):
        settings = Settings(API_KEYS=None, JWT_SECRET=None)
        self.assertIsNone(resolve_user_id(None, None, settings))

    def test_api_keys_are_trimmed(self):
        self.assertEqual(configured_api_keys(self.settings), frozenset({"key-a", "key-b"}))

    def test_bearer_token_parsing(self):
        self.assertEqual(bearer_token("Bearer abc"), "abc")
        self.assertEqual(bearer_token("bearer  abc "), "abc")
        self.assertIsNone(bearer_token("Basic abc"))
        self.assertIsNone(bearer_token("Bearer"))
        self.assertIsNone(bearer_token(None))

    def test_api_key_is_anonymous(self):
        self.assertIsNone(resolve_user_id("key-b", None, self.settings))

    def test_jwt_subject_becomes_user_id(self):
        self.assertEqual(resolve_user_id(None, _token({"sub": "42"}), self.settings), 42)
        self.assertIsNone(resolve_user_id(None, _token({"sub": "ops-bot"}), self.settings))

    def test_rejections(self):
        cases = [
            (None, None),
            ("wrong-key", None),
            (None, _token({"sub": "42"}, secret="another-secret-with-enough-bytes")),
            ("key-a", "Bearer not-a-jwt"),
        ]
        for api_key, authorization in cases:
            with self.subTest(api_key=api_key, authorization=authorization):
                with self.assertRaises(HTTPException) as ctx:
                    resolve_user_id(api_key, authorization, self.settings)
                self.assertEqual(ctx.exception.status_code, 401)


if __name__ == "__main__":
    unittest.main()
