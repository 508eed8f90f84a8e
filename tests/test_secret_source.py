"""Tests for the ready-made secret provisioning callbacks."""
import errno
import logging

from tlscore.errors.error import Error, ErrorCode
from tlscore.security.secret_buffer import SecretBuffer
from tlscore.security.secret_source import environment_secret, load_secret, static_secret


class TestStaticSecret:
    def test_fills_secret(self):
        secret = SecretBuffer()
        error = static_secret(b"\x01\x02")(secret)
        assert not error
        assert secret.data() == b"\x01\x02"

    def test_text_is_utf8(self):
        secret = SecretBuffer()
        static_secret("key")(secret)
        assert secret.data() == b"key"

    def test_appends_to_existing_content(self):
        secret = SecretBuffer(b"\xaa")
        static_secret(b"\xbb")(secret)
        assert secret.data() == b"\xaa\xbb"


class TestEnvironmentSecret:
    def test_reads_hex(self, monkeypatch):
        monkeypatch.setenv("TLS_TEST_KEY", "00ff10")
        secret = SecretBuffer()
        assert not environment_secret("TLS_TEST_KEY")(secret)
        assert secret.data() == b"\x00\xff\x10"

    def test_reads_at_call_time(self, monkeypatch):
        callback = environment_secret("TLS_TEST_KEY")
        monkeypatch.setenv("TLS_TEST_KEY", "01")
        secret = SecretBuffer()
        callback(secret)
        assert secret.data() == b"\x01"

    def test_missing_variable(self, monkeypatch):
        monkeypatch.delenv("TLS_TEST_KEY", raising=False)
        secret = SecretBuffer()
        error = environment_secret("TLS_TEST_KEY")(secret)
        assert error.code == ErrorCode.INVALID
        assert secret.empty()

    def test_malformed_hex(self, monkeypatch):
        monkeypatch.setenv("TLS_TEST_KEY", "xyz")
        secret = SecretBuffer()
        assert environment_secret("TLS_TEST_KEY")(secret).code == ErrorCode.INVALID
        assert secret.empty()


class TestLoadSecret:
    def test_success(self):
        error, secret = load_secret(static_secret(b"\x01\x02\x03"))
        assert error == Error()
        assert secret.size() == 3

    def test_error_outcome_wipes_partial_secret(self):
        def partial(result):
            result.append(b"half")
            return Error.from_code(ErrorCode.CANCELLED)

        error, secret = load_secret(partial)
        assert error.code == ErrorCode.CANCELLED
        assert secret.empty()

    def test_raising_callback_is_classified(self):
        def broken(result):
            result.append(1)
            raise PermissionError(errno.EACCES, "denied")

        error, secret = load_secret(broken)
        assert error.code == ErrorCode.NOT_AUTHORIZED
        assert error.number == errno.EACCES
        assert secret.empty()

    def test_logs_size_only(self, caplog):
        caplog.set_level(logging.DEBUG, logger="tlscore")
        load_secret(static_secret(b"supersecret"))
        assert "loaded 11 byte secret" in caplog.text
        assert "supersecret" not in caplog.text
