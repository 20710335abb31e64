"""Tests for mastery.core.response - the LedgerResponse envelope."""

from __future__ import annotations

import pytest

from mastery.core.exceptions import LedgerError
from mastery.core.ledger import ErrorKind
from mastery.core.response import LedgerResponse, err, ok


class TestOk:
    """Tests for ok()."""

    def test_ok_with_data(self):
        response = ok(3)
        assert response.success is True
        assert response.data == 3
        assert response.error is None
        assert response.code is None

    def test_ok_without_data(self):
        assert ok().to_dict() == {"success": True}

    def test_ok_to_dict(self):
        assert ok(True).to_dict() == {"success": True, "data": True}

    def test_ok_zero_is_kept(self):
        """An id of 0 is data, not absence."""
        assert ok(0).to_dict() == {"success": True, "data": 0}


class TestErr:
    """Tests for err()."""

    def test_err_fields(self):
        response = err(ErrorKind.NOT_AUTHORIZED)
        assert response.success is False
        assert response.error == ErrorKind.NOT_AUTHORIZED
        assert response.code == 100
        assert response.message is None

    def test_err_to_dict(self):
        d = err(ErrorKind.INVALID_EXPIRY, "expiry in the past").to_dict()
        assert d == {
            "success": False,
            "error": "InvalidExpiry",
            "code": 117,
            "message": "expiry in the past",
        }

    def test_err_to_dict_without_message(self):
        assert "message" not in err(ErrorKind.INVALID_PROOF).to_dict()


class TestUnwrap:
    """Tests for LedgerResponse.unwrap()."""

    def test_unwrap_success(self):
        assert ok("value").unwrap() == "value"

    def test_unwrap_failure_raises(self):
        with pytest.raises(LedgerError) as exc_info:
            err(ErrorKind.NOT_VERIFIED, "no such id").unwrap()
        assert exc_info.value.kind == ErrorKind.NOT_VERIFIED
        assert exc_info.value.message == "no such id"

    def test_direct_construction(self):
        response = LedgerResponse(success=False, error=ErrorKind.TRANSFER_FAILED)
        assert response.code == 121
