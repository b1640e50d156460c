"""Tests for error classification."""

import unittest

from core.exceptions import (
    ConnectionFailed,
    DecodingError,
    EncodingError,
    InvalidInput,
    InvalidResponse,
    InvalidURL,
    NetworkError,
    NoNetworkConnection,
    NoResponseContent,
    RequestTimeout,
    ServerError,
    is_retryable,
    liuyao_exception_handler,
)


class TestRetryability(unittest.TestCase):
    def test_server_error_codes(self) -> None:
        for code in (429, 500, 502, 503, 504):
            self.assertTrue(is_retryable(ServerError(code)), code)
        for code in (400, 401, 403, 404, 422):
            self.assertFalse(is_retryable(ServerError(code)), code)

    def test_transport_errors_are_retryable(self) -> None:
        for error in (NetworkError(OSError("reset")), NoNetworkConnection(), RequestTimeout(), ConnectionFailed()):
            self.assertTrue(is_retryable(error), type(error).__name__)

    def test_data_errors_are_not_retryable(self) -> None:
        for error in (EncodingError(), DecodingError(), InvalidURL(), InvalidResponse(), NoResponseContent(), InvalidInput()):
            self.assertFalse(is_retryable(error), type(error).__name__)

    def test_foreign_exceptions(self) -> None:
        self.assertFalse(is_retryable(ValueError("x")))

    def test_server_error_categories(self) -> None:
        self.assertNotEqual(ServerError(429).category, ServerError(503).category)
        self.assertEqual(ServerError(401).category, ServerError(403).category)
        self.assertEqual(ServerError(503).code, 503)

    def test_default_message_is_category(self) -> None:
        error = NoResponseContent()
        self.assertEqual(error.message, error.category)
        self.assertEqual(str(error), error.category)


class TestExceptionHandler(unittest.TestCase):
    def test_status_codes(self) -> None:
        self.assertEqual(liuyao_exception_handler(RequestTimeout()).status_code, 503)
        self.assertEqual(liuyao_exception_handler(NetworkError(OSError())).status_code, 503)
        self.assertEqual(liuyao_exception_handler(ServerError(500)).status_code, 502)
        self.assertEqual(liuyao_exception_handler(DecodingError()).status_code, 502)
        self.assertEqual(liuyao_exception_handler(EncodingError()).status_code, 500)
        self.assertEqual(liuyao_exception_handler(InvalidInput()).status_code, 400)


if __name__ == "__main__":
    unittest.main()
