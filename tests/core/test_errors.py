"""Error Hierarchy — REST and SSE envelopes, status codes, recoverability."""

from curator.core.errors import (
    AnthropicAPIError,
    AuthenticationRequiredError,
    DatabaseError,
    ErrorContext,
    PermissionDeniedError,
    RateLimitExceededError,
    ResourceNotFoundError,
)


def test_not_found_response_envelope():
    err = ResourceNotFoundError("Exhibition", "abc", ErrorContext(exhibition_id="abc"))
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Exhibition 'abc' not found"
    assert body["context"]["exhibition_id"] == "abc"


def test_user_message_overrides_internal_message():
    err = DatabaseError("deadlock on row 7", "insert",
                        ErrorContext(user_message="Please retry"))
    assert err.to_response()["error"]["message"] == "Please retry"
    assert err.to_sse_event()["data"]["message"] == "Please retry"


def test_status_codes():
    assert AuthenticationRequiredError().http_status == 401
    assert PermissionDeniedError().http_status == 403
    assert RateLimitExceededError().http_status == 429


def test_rate_limit_carries_retry_after():
    err = RateLimitExceededError(1500)
    assert err.context.retry_after_ms == 1500
    assert err.to_response()["error"]["context"]["retry_after_ms"] == 1500


def test_warning_errors_are_recoverable_in_sse():
    assert RateLimitExceededError().to_sse_event()["data"]["recoverable"] is True


def test_critical_errors_are_not_recoverable_in_sse():
    event = AnthropicAPIError("overloaded", "overloaded_error").to_sse_event()
    assert event == {
        "type": "error",
        "data": {
            "code": "ANTHROPIC_API_ERROR",
            "message": "Anthropic API error (overloaded_error): overloaded",
            "severity": "critical",
            "recoverable": False,
        },
    }
