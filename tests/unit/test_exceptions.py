"""Unit tests for exception hierarchy and error formatting."""

import pytest

from anchoredit.core.exceptions import (
    E_DEGENERATE,
    E_NOT_FOUND,
    E_PERMISSIONS,
    E_VALIDATION,
    AnchorEditException,
    ConfigurationError,
    DegenerateInputError,
    SnippetNotFoundError,
    StructuralInvariantError,
    WorkspaceSecurityError,
    format_error_for_log,
    format_error_for_user,
)


class TestAnchorEditException:
    def test_basic_creation(self):
        exc = AnchorEditException("Test error")
        assert exc.message == "Test error"
        assert exc.error_code is None
        assert exc.metadata == {}
        assert str(exc) == "Test error"

    def test_with_error_code_and_metadata(self):
        exc = AnchorEditException("Test error", error_code=E_VALIDATION, metadata={"k": 1})
        assert exc.error_code == E_VALIDATION
        assert exc.metadata == {"k": 1}

    def test_exception_behavior(self):
        with pytest.raises(AnchorEditException) as exc_info:
            raise AnchorEditException("Raised error")
        assert str(exc_info.value) == "Raised error"
        assert isinstance(exc_info.value, Exception)


class TestSnippetNotFoundError:
    def test_defaults(self):
        exc = SnippetNotFoundError("Could not find matching nodes")
        assert exc.error_code == E_NOT_FOUND
        assert exc.metadata == {}

    def test_with_counts(self):
        exc = SnippetNotFoundError("missing", snippet_length=12, fragment_count=7)
        assert exc.metadata == {"snippet_length": 12, "fragment_count": 7}
        assert isinstance(exc, AnchorEditException)


class TestDegenerateInputError:
    def test_defaults(self):
        exc = DegenerateInputError("empty", argument="snippet")
        assert exc.error_code == E_DEGENERATE
        assert exc.metadata["argument"] == "snippet"


class TestStructuralInvariantError:
    def test_metadata(self):
        exc = StructuralInvariantError("bad split", depth=3, snippet_start=16)
        assert exc.error_code == E_VALIDATION
        assert exc.metadata == {"depth": 3, "snippet_start": 16}


class TestWorkspaceSecurityError:
    def test_defaults(self):
        exc = WorkspaceSecurityError("outside", path="../x", reason="outside_workspace")
        assert exc.error_code == E_PERMISSIONS
        assert exc.metadata == {"path": "../x", "reason": "outside_workspace"}

    def test_custom_error_code(self):
        exc = WorkspaceSecurityError("missing", error_code=E_NOT_FOUND)
        assert exc.error_code == E_NOT_FOUND


class TestConfigurationError:
    def test_with_key(self):
        exc = ConfigurationError("bad value", key="max_workers")
        assert exc.error_code == E_VALIDATION
        assert exc.metadata["config_key"] == "max_workers"


class TestFormatErrorForUser:
    def test_snippet_not_found(self):
        exc = SnippetNotFoundError("Could not find matching nodes")
        assert format_error_for_user(exc) == "Could not apply edit: Could not find matching nodes"

    def test_degenerate_input(self):
        exc = DegenerateInputError("must not be empty", argument="snippet")
        assert format_error_for_user(exc) == "Invalid input 'snippet': must not be empty"

    def test_degenerate_input_no_argument(self):
        assert format_error_for_user(DegenerateInputError("empty")) == "Invalid input: empty"

    def test_workspace_error(self):
        exc = WorkspaceSecurityError("not allowed", path="/etc")
        assert format_error_for_user(exc) == "Workspace error with path '/etc': not allowed"

    def test_configuration_error(self):
        exc = ConfigurationError("too small", key="target_depth")
        assert format_error_for_user(exc) == "Configuration error 'target_depth': too small"

    def test_base_exception(self):
        assert format_error_for_user(AnchorEditException("plain")) == "plain"


class TestFormatErrorForLog:
    def test_snippet_not_found(self):
        exc = SnippetNotFoundError("missing", snippet_length=10, fragment_count=3)
        log_data = format_error_for_log(exc)

        assert log_data["error_type"] == "SnippetNotFoundError"
        assert log_data["error_code"] == E_NOT_FOUND
        assert log_data["snippet_length"] == 10
        assert log_data["fragment_count"] == 3
        assert log_data["metadata"] == {"snippet_length": 10, "fragment_count": 3}

    def test_workspace_error(self):
        exc = WorkspaceSecurityError("outside", path="../x", reason="outside_workspace")
        log_data = format_error_for_log(exc)
        assert log_data["path"] == "../x"
        assert log_data["reason"] == "outside_workspace"

    def test_base_exception_without_metadata(self):
        log_data = format_error_for_log(AnchorEditException("plain"))
        assert log_data == {
            "error_type": "AnchorEditException",
            "message": "plain",
            "error_code": None,
        }
