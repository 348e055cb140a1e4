"""
Unit tests for best-effort storage calls.
"""

import logging
import sqlite3

from core.safe_call import is_transient_storage_error, safe_call

logger = logging.getLogger("tests.safe_call")


class TestSafeCall:
    """Test retry and error capture."""

    def test_success(self):
        res = safe_call(logger, user_error="nope", fn=lambda: 42)
        assert res.ok is True
        assert res.value == 42
        assert res.retry_count == 0
        assert res.error_user is None

    def test_non_transient_fails_fast(self):
        calls = {"n": 0}

        def boom():
            calls["n"] += 1
            raise RuntimeError("disk full")

        res = safe_call(logger, user_error="Could not save.", fn=boom)
        assert res.ok is False
        assert res.error_user == "Could not save."
        assert res.error_debug == "RuntimeError: disk full"
        assert calls["n"] == 1

    def test_transient_is_retried(self):
        calls = {"n": 0}

        def flaky():
            calls["n"] += 1
            if calls["n"] == 1:
                raise sqlite3.OperationalError("database is locked")
            return "saved"

        res = safe_call(logger, user_error="nope", fn=flaky)
        assert res.ok is True
        assert res.value == "saved"
        assert res.retry_count == 1
        assert calls["n"] == 2

    def test_request_id_present(self):
        res = safe_call(logger, user_error="nope", fn=lambda: None)
        assert len(res.request_id) == 8

    def test_retry_is_logged(self, caplog):
        calls = {"n": 0}

        def flaky():
            calls["n"] += 1
            if calls["n"] == 1:
                raise sqlite3.OperationalError("database is locked")

        with caplog.at_level(logging.WARNING, logger="tests.safe_call"):
            safe_call(logger, user_error="nope", fn=flaky, operation="save_poems")
        assert "op=save_poems storage_busy attempt=1" in caplog.text

    def test_failure_is_logged(self, caplog):
        def boom():
            raise ValueError("Stored 'savedPoems' is malformed")

        with caplog.at_level(logging.ERROR, logger="tests.safe_call"):
            res = safe_call(logger, user_error="nope", fn=boom, operation="load_poems")
        assert res.ok is False
        assert "op=load_poems storage_failed attempts=1" in caplog.text


class TestTransientErrors:
    """Test which storage errors are retried."""

    def test_transient(self):
        for e in [
            sqlite3.OperationalError("database is locked"),
            TimeoutError("slow disk"),
            ConnectionError("reset by peer"),
            RuntimeError("could not connect to server"),
        ]:
            assert is_transient_storage_error(e) is True, e

    def test_not_transient(self):
        for e in [
            RuntimeError("disk full"),
            ValueError("Stored 'savedPoems' is malformed"),
            RuntimeError("psycopg is not installed"),
        ]:
            assert is_transient_storage_error(e) is False, e
