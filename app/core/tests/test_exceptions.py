"""
Tests for application exception classes and ServiceResult.
"""

from core.exceptions import (
    BaseApplicationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.services import ServiceResult


class TestApplicationErrors:
    def test_default_codes(self):
        assert ValidationError("bad").error_code == "VALIDATION_ERROR"
        assert NotFoundError("gone").error_code == "NOT_FOUND"
        assert PermissionDeniedError("no").error_code == "PERMISSION_DENIED"

    def test_to_dict_omits_empty_details(self):
        error = ValidationError("Invalid cursor", error_code="INVALID_CURSOR")

        assert error.to_dict() == {"error": "Invalid cursor", "error_code": "INVALID_CURSOR"}

    def test_to_dict_includes_details(self):
        error = ValidationError("Too big", details={"max_page_size": 100})

        assert error.to_dict()["details"] == {"max_page_size": 100}

    def test_str_and_subclassing(self):
        error = NotFoundError("Chat not found", error_code="CHAT_NOT_FOUND")

        assert str(error) == "[CHAT_NOT_FOUND] Chat not found"
        assert isinstance(error, BaseApplicationError)


class TestServiceResult:
    def test_success(self):
        result = ServiceResult.success({"id": 1})

        assert result
        assert result.to_response() == {"success": True, "data": {"id": 1}}

    def test_failure(self):
        result = ServiceResult.failure("Nope", error_code="NOT_OWNER")

        assert not result
        assert result.data is None
        assert result.to_response() == {
            "success": False,
            "error": "Nope",
            "error_code": "NOT_OWNER",
        }
