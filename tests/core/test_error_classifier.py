"""Tests for error classification, severity ordering and classified error logging."""

import asyncio
import logging

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from costplus_mcp.core.errors import (
    ApiErrorKind,
    ClassifiedError,
    EmptyResponseError,
    ErrorClassifier,
    ErrorSeverity,
    MalformedResponseError,
    RequestTimeoutError,
    ResponseShapeError,
    ToolInputValidationError,
    UpstreamStatusError,
)


@pytest.fixture
def classifier():
    return ErrorClassifier()


class TestErrorSeverity:
    """Tests for the ordered severity enum."""

    def test_ordering(self):
        assert ErrorSeverity.LOW < ErrorSeverity.MEDIUM < ErrorSeverity.HIGH < ErrorSeverity.CRITICAL
        assert ErrorSeverity.CRITICAL >= ErrorSeverity.HIGH
        assert not ErrorSeverity.HIGH <= ErrorSeverity.MEDIUM

    def test_max_picks_most_severe(self):
        assert max([ErrorSeverity.MEDIUM, ErrorSeverity.CRITICAL, ErrorSeverity.LOW]) is ErrorSeverity.CRITICAL


class TestClassify:
    """Tests for ErrorClassifier.classify mapping rules."""

    def test_request_timeout(self, classifier):
        error = classifier.classify(RequestTimeoutError("/graphql/", 30.0), "ctx")
        assert error.kind is ApiErrorKind.TIMEOUT
        assert error.severity is ErrorSeverity.MEDIUM
        assert error.retryable is True
        assert error.details["timeout_seconds"] == 30.0
        assert error.context_label == "ctx"

    def test_asyncio_timeout(self, classifier):
        error = classifier.classify(asyncio.TimeoutError())
        assert error.kind is ApiErrorKind.TIMEOUT
        assert error.message == "TimeoutError"

    def test_httpx_timeout(self, classifier):
        error = classifier.classify(httpx.ReadTimeout("read timed out"))
        assert error.kind is ApiErrorKind.TIMEOUT

    def test_connection_error(self, classifier):
        error = classifier.classify(httpx.ConnectError("connection refused"))
        assert error.kind is ApiErrorKind.CONNECTION_ERROR
        assert error.severity is ErrorSeverity.HIGH
        assert error.retryable is True

    def test_builtin_connection_error(self, classifier):
        error = classifier.classify(ConnectionResetError("reset by peer"))
        assert error.kind is ApiErrorKind.CONNECTION_ERROR

    def test_rate_limit(self, classifier):
        raw = UpstreamStatusError("/graphql/", 429, "Too Many Requests", retry_after=5.0)
        error = classifier.classify(raw)
        assert error.kind is ApiErrorKind.RATE_LIMIT
        assert error.severity is ErrorSeverity.MEDIUM
        assert error.retryable is True
        assert error.details["status_code"] == 429
        assert error.details["retry_after"] == 5.0

    @pytest.mark.parametrize("status_code", [502, 503, 504])
    def test_gateway_errors_are_connection_errors(self, classifier, status_code):
        error = classifier.classify(UpstreamStatusError("/graphql/", status_code))
        assert error.kind is ApiErrorKind.CONNECTION_ERROR

    def test_request_timeout_status(self, classifier):
        error = classifier.classify(UpstreamStatusError("/graphql/", 408))
        assert error.kind is ApiErrorKind.TIMEOUT

    @pytest.mark.parametrize("status_code", [400, 401, 404, 500])
    def test_other_statuses_are_http_errors(self, classifier, status_code):
        error = classifier.classify(UpstreamStatusError("/graphql/", status_code, "Error"))
        assert error.kind is ApiErrorKind.HTTP_ERROR
        assert error.severity is ErrorSeverity.HIGH
        assert error.retryable is False
        assert error.message == f"HTTP {status_code}: Error"

    def test_empty_response(self, classifier):
        error = classifier.classify(EmptyResponseError("/graphql/", request_body="{}"))
        assert error.kind is ApiErrorKind.INVALID_RESPONSE
        assert error.details["reason"] == "empty"
        assert error.details["endpoint"] == "/graphql/"
        assert error.details["body"] == "{}"
        assert error.retryable is False

    def test_malformed_response(self, classifier):
        raw = MalformedResponseError("/graphql/", response_text="<html>", parse_error="Expecting value")
        error = classifier.classify(raw)
        assert error.kind is ApiErrorKind.INVALID_RESPONSE
        assert error.details["reason"] == "unparsable"
        assert error.details["parse_error"] == "Expecting value"
        assert error.details["response_text"] == "<html>"

    def test_unexpected_response_shape(self, classifier):
        raw = ResponseShapeError("/graphql/", "data.products.edges", upstream_errors=[{"message": "boom"}])
        error = classifier.classify(raw)
        assert error.kind is ApiErrorKind.INVALID_RESPONSE
        assert error.severity is ErrorSeverity.HIGH
        assert error.retryable is False
        assert error.details["reason"] == "unexpected_shape"
        assert error.details["missing"] == "data.products.edges"
        assert error.message == "API response has no data.products.edges: boom"

    def test_tool_input_validation(self, classifier):
        raw = ToolInputValidationError("get_all_products", [{"loc": ["first"], "msg": "too big", "type": "x"}])
        error = classifier.classify(raw)
        assert error.kind is ApiErrorKind.VALIDATION_ERROR
        assert error.severity is ErrorSeverity.LOW
        assert error.details["tool_name"] == "get_all_products"

    def test_pydantic_validation(self, classifier):
        class Model(BaseModel):
            count: int

        with pytest.raises(ValidationError) as exc_info:
            Model.model_validate({"count": "many"})

        error = classifier.classify(exc_info.value)
        assert error.kind is ApiErrorKind.VALIDATION_ERROR
        assert error.details["errors"]

    def test_unknown(self, classifier):
        error = classifier.classify(RuntimeError("kaboom"))
        assert error.kind is ApiErrorKind.UNKNOWN
        assert error.severity is ErrorSeverity.HIGH
        assert error.details["exception"] == "RuntimeError"
        assert error.retryable is False

    def test_empty_message_uses_type_name(self, classifier):
        assert classifier.classify(RuntimeError()).message == "RuntimeError"

    def test_classified_error_returned_unchanged(self, classifier):
        original = ClassifiedError("x", kind=ApiErrorKind.TIMEOUT, severity=ErrorSeverity.MEDIUM)
        assert classifier.classify(original) is original

    def test_secrets_redacted_from_message(self, classifier):
        error = classifier.classify(RuntimeError("failed with api_key=sk-1234567890abcdef"))
        assert "sk-1234567890abcdef" not in error.message
        assert "****" in error.message

    def test_original_error_preserved(self, classifier):
        raw = ValueError("bad")
        assert classifier.classify(raw).original_error is raw


class TestDerive:
    """Tests for tagging classified errors with a correlation id."""

    def test_only_correlation_id_changes(self, classifier):
        error = classifier.classify(UpstreamStatusError("/graphql/", 500), "label")
        tagged = classifier.derive(error, correlation_id="mcp-costplus-1")

        assert tagged is not error
        assert tagged.correlation_id == "mcp-costplus-1"
        assert error.correlation_id == ""
        assert tagged.kind is error.kind
        assert tagged.severity is error.severity
        assert dict(tagged.details) == dict(error.details)
        assert tagged.context_label == error.context_label
        assert tagged.original_error is error.original_error

    def test_details_are_read_only(self, classifier):
        error = classifier.classify(UpstreamStatusError("/graphql/", 500))
        with pytest.raises(TypeError):
            error.details["status_code"] = 200  # type: ignore[index]


class TestToDict:
    """Tests for ClassifiedError.to_dict."""

    def test_contains_classification_and_details(self, classifier):
        error = classifier.derive(
            classifier.classify(UpstreamStatusError("/graphql/", 404, "Not Found"), "ctx"),
            correlation_id="cid",
        )
        data = error.to_dict()
        assert data["kind"] == "http_error"
        assert data["severity"] == "high"
        assert data["correlation_id"] == "cid"
        assert data["retryable"] is False
        assert data["context"] == "ctx"
        assert data["status_code"] == 404


class TestLog:
    """Tests for ErrorClassifier.log."""

    @pytest.mark.parametrize(
        "severity,level",
        [
            (ErrorSeverity.LOW, logging.INFO),
            (ErrorSeverity.MEDIUM, logging.WARNING),
            (ErrorSeverity.HIGH, logging.ERROR),
            (ErrorSeverity.CRITICAL, logging.CRITICAL),
        ],
    )
    def test_level_follows_severity(self, classifier, caplog, severity, level):
        error = ClassifiedError("boom", kind=ApiErrorKind.UNKNOWN, severity=severity, correlation_id="cid-1")
        with caplog.at_level(logging.DEBUG, logger="costplus_mcp.core.errors.classifier"):
            classifier.log(error, "API request to /graphql/")

        record = caplog.records[-1]
        assert record.levelno == level
        assert "API request to /graphql/" in record.getMessage()
        assert "cid-1" in record.getMessage()
        assert record.api_error["kind"] == "unknown"
        assert record.context_label == "API request to /graphql/"

    def test_never_raises(self, classifier, monkeypatch):
        error = ClassifiedError("boom", kind=ApiErrorKind.UNKNOWN, severity=ErrorSeverity.HIGH)

        def broken_log(*args, **kwargs):
            raise RuntimeError("handler exploded")

        monkeypatch.setattr(logging.getLogger("costplus_mcp.core.errors.classifier"), "log", broken_log)
        classifier.log(error, "ctx")
