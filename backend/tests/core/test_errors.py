"""Error Hierarchy — status codes, codes, and envelope shape.

Tests:
    - Unauthorized and Forbidden stay distinguishable (class, code, status)
    - Configuration faults are 500, not caller errors
    - Provider transport errors keep internal detail out of the message
    - to_response carries success=false and the error block
"""

from findtell.core.errors import (
    ConfigurationMissingError,
    ErrorCategory,
    FindTellError,
    ForbiddenError,
    InputError,
    ProviderTransportError,
    ResourceNotFoundError,
    StoreError,
    UnauthorizedError,
)


def test_unauthorized_and_forbidden_are_distinct():
    unauthorized, forbidden = UnauthorizedError(), ForbiddenError()
    assert unauthorized.http_status == 401
    assert forbidden.http_status == 403
    assert unauthorized.code != forbidden.code
    assert not isinstance(unauthorized, ForbiddenError)


def test_configuration_missing_is_server_fault():
    err = ConfigurationMissingError("admin_token", "Admin authentication not configured")
    assert err.http_status == 500
    assert err.category is ErrorCategory.CONFIGURATION
    assert err.setting == "admin_token"


def test_provider_transport_error_hides_reason():
    err = ProviderTransportError("validation", "ConnectError('dns failure')")
    assert "dns" not in err.message
    assert err.message == "Server error during validation. Please try again."
    assert err.reason == "ConnectError('dns failure')"
    assert err.context.debug_info == {"reason": "ConnectError('dns failure')"}


def test_caller_error_statuses():
    assert InputError("Chart type is required", "chartType").http_status == 400
    assert ResourceNotFoundError("Default configuration", "line").http_status == 404
    assert StoreError("Could not write key", "set").http_status == 503


def test_to_response_envelope():
    body = InputError("Chart type is required", "chartType").to_response()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["message"] == "Chart type is required"
    assert body["error"]["category"] == "validation"
    assert "timestamp" in body["error"]


def test_all_errors_share_base():
    for err in (
        InputError("x", "f"), UnauthorizedError(), ForbiddenError(),
        StoreError("x", "get"), ProviderTransportError("validation", "x"),
    ):
        assert isinstance(err, FindTellError)
