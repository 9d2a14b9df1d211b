"""
Tests for the exception hierarchy.
"""

import pytest

from sqlblob.exceptions import (
    AllocationError,
    AllocationFailure,
    CodecError,
    ConfigurationError,
    MalformedEncoding,
    MalformedEncodingError,
    SqlBlobError,
)


class TestHierarchy:
    """Verify all exceptions inherit from SqlBlobError."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            CodecError,
            AllocationError,
            MalformedEncodingError,
        ],
    )
    def test_inherits_from_sqlblob_error(self, exc_class):
        assert issubclass(exc_class, SqlBlobError)

    def test_codec_errors(self):
        assert issubclass(AllocationError, CodecError)
        assert issubclass(MalformedEncodingError, CodecError)

    def test_failure_kind_aliases(self):
        assert AllocationFailure is AllocationError
        assert MalformedEncoding is MalformedEncodingError


class TestExceptionMessages:
    """Test exception constructors and details."""

    def test_sqlblob_error(self):
        e = SqlBlobError("boom", details={"key": "val"})
        assert str(e) == "boom"
        assert e.message == "boom"
        assert e.details == {"key": "val"}

    def test_sqlblob_error_default_details(self):
        assert SqlBlobError("boom").details == {}

    def test_allocation_error(self):
        e = AllocationError(4096, limit=1024)
        assert "4096" in str(e)
        assert "1024" in str(e)
        assert e.requested == 4096
        assert e.limit == 1024
        assert e.details == {"requested": 4096, "limit": 1024}

    def test_allocation_error_without_limit(self):
        e = AllocationError(10)
        assert str(e) == "Cannot allocate buffer of 10 bytes"
        assert e.limit is None

    def test_malformed_encoding_error(self):
        e = MalformedEncodingError("invalid escape", position=7)
        assert "invalid escape" in str(e)
        assert "7" in str(e)
        assert e.reason == "invalid escape"
        assert e.position == 7
        assert e.details["position"] == 7

    def test_catchable_with_base(self):
        with pytest.raises(SqlBlobError):
            raise ConfigurationError("bad config")

        with pytest.raises(SqlBlobError):
            raise MalformedEncodingError("bad token")
