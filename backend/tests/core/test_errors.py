"""Error Hierarchy: codes, statuses and the ToolExecutionError wrapper.

Tests cover:
    - Each error carries its code and HTTP status
    - ToolExecutionError prefixes the message and inherits the cause's status
    - to_response shape (cause_code only for typed causes)
"""

from opal_tools.core.errors import (
    AuthenticationRequiredError, ErrorCategory, ErrorContext,
    MissingIdentifierError, MissingParameterError, ToolExecutionError,
    TransportError, UnknownToolError, UpstreamHTTPError,
)


def test_missing_parameter_singular_message():
    assert MissingParameterError(["name"]).message == "name is required"


def test_missing_identifier_lists_available_keys():
    err = MissingIdentifierError("project_id", ["credentials", "provider"])
    assert err.message.startswith("project_id is required.")
    assert "Available auth keys: credentials, provider" in err.message
    assert MissingIdentifierError("project_id", []).message.endswith(": none")


def test_upstream_error_message_embeds_status_and_body():
    err = UpstreamHTTPError(
        "Failed to create experiment", 400, "Bad Request", '{"message":"bad"}',
    )
    assert err.message == (
        'Failed to create experiment: 400 Bad Request. {"message":"bad"}'
    )
    assert err.http_status == 502


def test_transport_error_names_url():
    err = TransportError("connection refused", "https://api.example.com/x")
    assert err.message == "Request to https://api.example.com/x failed: connection refused"
    assert err.http_status == 503


def test_unknown_tool_is_404():
    err = UnknownToolError("nope")
    assert err.http_status == 404
    assert err.message == "Tool 'nope' does not exist."


def test_tool_execution_error_inherits_cause():
    """Wrapped errors keep the cause's status and category."""
    cause = AuthenticationRequiredError()
    err = ToolExecutionError("Failed to list Optimizely events", cause)
    assert err.message == f"Failed to list Optimizely events: {cause.message}"
    assert err.http_status == 401
    assert err.category == ErrorCategory.AUTHENTICATION
    assert err.cause is cause


def test_tool_execution_error_with_untyped_cause_is_internal():
    """Unexpected exceptions become 500 internal errors."""
    err = ToolExecutionError("Failed to generate experiment report", ValueError("boom"))
    assert err.http_status == 500
    assert err.category == ErrorCategory.INTERNAL
    assert err.message == "Failed to generate experiment report: boom"
    assert "cause_code" not in err.to_response()["error"]


def test_to_response_shape():
    err = ToolExecutionError(
        "Failed", MissingParameterError(["name"]),
        ErrorContext(tool_name="create_experiment"),
    )
    body = err.to_response()["error"]
    assert body["code"] == "TOOL_EXECUTION_FAILED"
    assert body["cause_code"] == "MISSING_PARAMETER"
    assert body["category"] == "validation"
    assert body["context"] == {"tool_name": "create_experiment"}
    assert body["message"] == "Failed: name is required"
