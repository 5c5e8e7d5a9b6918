"""Tests for error types and codes."""

import pytest

from appinspector.core.errors import (
    AppInspectorError,
    ArgumentError,
    BootstrapError,
    CatalogError,
    ConfigError,
    ErrorCode,
    InternalError,
    TypeNotFoundError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.APP_NOT_FOUND, 3000),
            (ErrorCode.BOOTSTRAP_FAILED, 3000),
            (ErrorCode.CATALOG_DIR_MISSING, 4000),
            (ErrorCode.TYPE_NOT_FOUND, 4000),
            (ErrorCode.ARGUMENT_REQUIRED, 5000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestAppInspectorError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = AppInspectorError(
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
        error = AppInspectorError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        assert str(error) == "[9001] INTERNAL_ERROR: Something broke"

    def test_error_is_raisable(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(AppInspectorError) as exc_info:
            raise TypeNotFoundError.for_name("Model", "Ghost")

        assert exc_info.value.error_name == "TYPE_NOT_FOUND"


class TestFactories:
    """Classmethod factories produce the user-facing messages."""

    def test_app_not_found_message(self) -> None:
        """Missing app reports its root."""
        error = BootstrapError.app_not_found("/srv/shop")

        assert error.code == ErrorCode.APP_NOT_FOUND
        assert error.message == "Application not found at: /srv/shop"
        assert error.details == {"root": "/srv/shop"}

    def test_bootstrap_failed_message(self) -> None:
        """Bootstrap failure names the target and reason."""
        error = BootstrapError.failed("shop", "boom")

        assert error.message == "Failed to bootstrap 'shop': boom"

    def test_missing_directory_message(self) -> None:
        """Missing catalog directory uses the directory label."""
        error = CatalogError.missing_directory("app/enums", "/srv/shop/app/enums")

        assert error.message == "No app/enums directory found"
        assert error.details["path"] == "/srv/shop/app/enums"

    @pytest.mark.parametrize(
        ("label", "name", "expected"),
        [
            ("Model", "User", "Model 'User' not found"),
            ("Enum", "accounts/Kind", "Enum 'accounts/Kind' not found"),
        ],
    )
    def test_type_not_found_message(self, label: str, name: str, expected: str) -> None:
        """Not-found message quotes the name as given."""
        assert TypeNotFoundError.for_name(label, name).message == expected

    def test_argument_required(self) -> None:
        """Argument errors carry the message verbatim."""
        error = ArgumentError.required("Model name required")

        assert error.code == ErrorCode.ARGUMENT_REQUIRED
        assert error.message == "Model name required"

    def test_config_invalid_value(self) -> None:
        """Invalid config values stringify the offending value."""
        error = ConfigError.invalid_value("target.models_package", 42, "bad")

        assert error.details == {"field": "target.models_package", "value": "42", "reason": "bad"}

    def test_internal_from_exception(self) -> None:
        """Wrapped exceptions keep their text and record their type."""
        error = InternalError.from_exception(ValueError("bad cast"), command="schema")

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.message == "bad cast"
        assert error.details == {"exception": "ValueError", "command": "schema"}

    def test_internal_from_silent_exception(self) -> None:
        """An exception without text is named by its type."""
        assert InternalError.from_exception(LookupError()).message == "LookupError"
