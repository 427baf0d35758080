import logging

from sqlalchemy.exc import OperationalError

import cleanup
from libs.result import Return
from src.app.use_cases.maintenance import CleanupResponse


def test_database_failure_is_logged_and_exits_nonzero(monkeypatch, caplog):
    async def failing_cleanup(db_uri):
        raise OperationalError("DELETE FROM reset_tokens", {}, Exception("database is locked"))

    monkeypatch.setattr(cleanup, "run_cleanup", failing_cleanup)

    with caplog.at_level(logging.ERROR, logger="cleanup"):
        exit_code = cleanup.main()

    assert exit_code == 1
    assert "Credential cleanup failed" in caplog.text
    assert "database is locked" in caplog.text


def test_successful_run_exits_zero(monkeypatch, caplog):
    async def fake_cleanup(db_uri):
        return Return.ok(CleanupResponse(tokens_deleted=2, rate_limits_deleted=5))

    monkeypatch.setattr(cleanup, "run_cleanup", fake_cleanup)

    with caplog.at_level(logging.INFO, logger="cleanup"):
        exit_code = cleanup.main()

    assert exit_code == 0
    assert "2 tokens" in caplog.text
    assert "5 rate limit records" in caplog.text
