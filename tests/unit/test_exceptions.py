import logging

import pytest

from hostblock.exceptions import (
    ErrorHandler,
    HostblockError,
    HostsPermissionError,
    format_error_message,
)

pytestmark = pytest.mark.unit


def test_log_and_raise_chains_original(caplog):
    handler = ErrorHandler(logging.getLogger("hostblock.test"))
    original = PermissionError("denied")

    with caplog.at_level(logging.ERROR, logger="hostblock.test"):
        with pytest.raises(HostsPermissionError) as excinfo:
            handler.log_and_raise(HostsPermissionError, "cannot write", original, {"path": "/etc/hosts"})

    err = excinfo.value
    assert err.message == "cannot write"
    assert err.details == {"path": "/etc/hosts", "original_error": "denied", "original_type": "PermissionError"}
    assert err.__cause__ is original
    assert "cannot write" in caplog.text


def test_format_error_message():
    err = HostblockError("boom", {"path": "/etc/hosts", "original_type": "OSError"})
    assert format_error_message(err) == "hostblock error: boom (path=/etc/hosts)"
    assert format_error_message(ValueError("bad")) == "ValueError: bad"
