"""
Tests for configuration helpers, logging setup, tokens and email delivery.
"""
import logging
import logging.handlers

import pytest

import config
from auth import bearer_token, create_access_token, decode_token, hash_password, verify_password
from logging_config import setup_logging
from models.base import utcnow
from utils import email as email_utils


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestConfig:
    @pytest.mark.parametrize("value, expected", [
        ("true", True), ("1", True), ("Yes", True), ("on", True),
        ("false", False), ("0", False), ("", False),
    ])
    def test_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("SOME_FLAG", value)
        assert config._flag("SOME_FLAG", "false") is expected

    def test_flag_default(self, monkeypatch):
        monkeypatch.delenv("SOME_FLAG", raising=False)
        assert config._flag("SOME_FLAG", "true") is True

    def test_test_database(self):
        assert config.DATABASE_URL == "sqlite://"
        assert config.JWT_ALGORITHM == "HS256"


@pytest.mark.unit
class TestLogging:
    def test_console_only(self, restore_root_logger):
        root = setup_logging(level="DEBUG", log_file="")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_rotating_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "rayunity.log"
        root = setup_logging(level="INFO", log_file=str(log_file))
        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 10 * 1024 * 1024
        assert file_handlers[0].backupCount == 5

        logging.getLogger("rayunity.test").info("vote cast")
        file_handlers[0].flush()
        assert "vote cast" in log_file.read_text()

    def test_noisy_loggers_quieted(self, restore_root_logger):
        setup_logging(level="DEBUG", log_file="")
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("urllib3").level == logging.WARNING


@pytest.mark.unit
class TestTokens:
    def test_round_trip(self):
        token, expires_at = create_access_token(7, "session-1", True, utcnow())
        payload = decode_token(token)
        assert payload["id"] == 7
        assert payload["jti"] == "session-1"
        assert payload["provider"] is True
        assert expires_at > utcnow()

    def test_expired_token(self):
        token, _ = create_access_token(7, "session-1", False, utcnow(), expires_minutes=-5)
        assert decode_token(token) is None

    def test_bearer_header(self):
        assert bearer_token("Bearer abc.def") == "abc.def"
        assert bearer_token("Basic abc") is None
        assert bearer_token(None) is None

    def test_password_hashing(self):
        hashed = hash_password("sunshine42")
        assert hashed != "sunshine42"
        assert verify_password("sunshine42", hashed)
        assert not verify_password("moonlight", hashed)


@pytest.mark.unit
class TestConfirmationEmail:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(email_utils, "BREVO_API_KEY", None)
        with pytest.raises(email_utils.EmailDeliveryError):
            email_utils.send_confirmation_email("priya@example.com", "123456")

    def test_posts_code_to_brevo(self, monkeypatch):
        calls = []

        class FakeResponse:
            status_code = 201
            text = ""

        def fake_post(url, **kwargs):
            calls.append((url, kwargs))
            return FakeResponse()

        monkeypatch.setattr(email_utils, "BREVO_API_KEY", "test-key")
        monkeypatch.setattr(email_utils.requests, "post", fake_post)
        email_utils.send_confirmation_email("priya@example.com", "482913")

        [(url, kwargs)] = calls
        assert url == email_utils.BREVO_URL
        assert kwargs["headers"]["api-key"] == "test-key"
        assert kwargs["json"]["to"] == [{"email": "priya@example.com"}]
        assert "482913" in kwargs["json"]["htmlContent"]

    def test_brevo_error(self, monkeypatch):
        class FakeResponse:
            status_code = 401
            text = "unauthorized"

        monkeypatch.setattr(email_utils, "BREVO_API_KEY", "bad-key")
        monkeypatch.setattr(email_utils.requests, "post", lambda url, **kwargs: FakeResponse())
        with pytest.raises(email_utils.EmailDeliveryError, match="unauthorized"):
            email_utils.send_confirmation_email("priya@example.com", "482913")
