"""Tests for error types and codes."""

import pytest

from filetrack.core.errors import (
    ConfigError,
    ErrorCode,
    FileTrackError,
    TrackerError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.CONFIG_FROZEN, 2000),
            (ErrorCode.PATH_OUTSIDE_ROOT, 3000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000

    def test_every_code_has_a_raiser(self) -> None:
        """Each code is produced by exactly one factory."""
        raised = {
            ConfigError.parse_error("a.yaml", "x").code,
            ConfigError.invalid_value("f", 1, "x").code,
            ConfigError.frozen("f").code,
            TrackerError.outside_root("/a", "/b").code,
        }
        assert raised == set(ErrorCode)


class TestFileTrackError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = FileTrackError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = FileTrackError(code=ErrorCode.PATH_OUTSIDE_ROOT, message="Something broke")
        assert str(error) == "[3001] PATH_OUTSIDE_ROOT: Something broke"

    def test_error_is_raisable(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(FileTrackError):
            raise TrackerError.outside_root("/etc/passwd", "/srv/site")


class TestConfigError:
    """ConfigError factory method tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/a/b.yaml", "bad indent")
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert error.details == {"path": "/a/b.yaml", "reason": "bad indent"}
        assert "/a/b.yaml" in error.message

    def test_invalid_value(self) -> None:
        error = ConfigError.invalid_value("tracker.build_dir", "", "must name a directory")
        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["field"] == "tracker.build_dir"

    def test_frozen(self) -> None:
        error = ConfigError.frozen("ignore_patterns")
        assert error.code == ErrorCode.CONFIG_FROZEN
        assert error.error_name == "CONFIG_FROZEN"
        assert "ignore_patterns" in error.message


class TestTrackerError:
    """TrackerError factory method tests."""

    def test_outside_root(self) -> None:
        error = TrackerError.outside_root("/etc/passwd", "/srv/site")
        assert error.code == ErrorCode.PATH_OUTSIDE_ROOT
        assert error.details == {"path": "/etc/passwd", "root": "/srv/site"}
        assert isinstance(error, FileTrackError)
