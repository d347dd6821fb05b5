"""Tests for error types and codes."""

import pytest

from archscan.core.errors import (
    ArchScanError,
    CacheError,
    ConfigError,
    ErrorCode,
    InternalError,
    ParseError,
    ReadError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.PARSE_FAILED, 3000),
            (ErrorCode.READ_FAILED, 3000),
            (ErrorCode.UNSUPPORTED_DIALECT, 3000),
            (ErrorCode.CACHE_CORRUPT, 4000),
            (ErrorCode.CACHE_STALE, 4000),
            (ErrorCode.CACHE_WRITE_FAILED, 4000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestArchScanError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = ArchScanError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = ArchScanError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"

    def test_error_is_raisable(self) -> None:
        with pytest.raises(ArchScanError) as exc_info:
            raise ParseError.failed("a.php", "boom")
        assert exc_info.value.code is ErrorCode.PARSE_FAILED


class TestConfigError:
    """ConfigError factory method tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/etc/archscan.yaml", "bad indent")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/etc/archscan.yaml" in error.message
        assert error.details == {"path": "/etc/archscan.yaml", "reason": "bad indent"}

    def test_invalid_value_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("scan.max_workers", 0, "must be >= 1")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "scan.max_workers" in error.message
        assert error.details["value"] == "0"


class TestScanErrors:
    """Parse and read error factories."""

    def test_parse_failed_names_file(self) -> None:
        error = ParseError.failed("src/Foo.php", "timeout")

        assert error.message == "Error parsing src/Foo.php: timeout"
        assert error.details["path"] == "src/Foo.php"

    def test_unsupported_dialect(self) -> None:
        error = ParseError.unsupported("README.md")

        assert error.code == ErrorCode.UNSUPPORTED_DIALECT
        assert "README.md" in error.message

    def test_read_failed(self) -> None:
        error = ReadError.failed("a.ts", "Permission denied")

        assert error.code == ErrorCode.READ_FAILED
        assert error.error_name == "READ_FAILED"


class TestCacheError:
    """Cache error factories."""

    def test_stale_records_both_keys(self) -> None:
        error = CacheError.stale("out/scan-cache.json", "abc", None)

        assert error.code == ErrorCode.CACHE_STALE
        assert error.details == {"path": "out/scan-cache.json", "expected": "abc", "found": None}

    def test_write_failed(self) -> None:
        error = CacheError.write_failed("out/scan-cache.json", "disk full")

        assert error.code == ErrorCode.CACHE_WRITE_FAILED
        assert "disk full" in error.message


class TestInternalError:
    """InternalError factory method tests."""

    def test_unexpected_keeps_details(self) -> None:
        error = InternalError.unexpected("grammar missing", dialect="php")

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.message == "Internal error: grammar missing"
        assert error.details == {"dialect": "php"}
