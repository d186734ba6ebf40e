"""Testes para a taxonomia de erros do conector."""

from __future__ import annotations

import pytest

from api.connectors.feishu.errors import (
    ApiError,
    DecodeError,
    EncodeError,
    FeishuError,
    SecurityError,
    TransportError,
    UnsupportedOperationError,
    format_error_message,
)


def test_format_with_and_without_request_id() -> None:
    assert format_error_message("boom", "im", "send_message", "") == "[im] send_message: boom"
    assert (
        format_error_message("boom", "im", "send_message", "r-1")
        == "[im] send_message (X-Request-ID: r-1): boom"
    )


@pytest.mark.parametrize("error_cls", [TransportError, EncodeError, DecodeError])
def test_outbound_errors_share_base(error_cls: type[FeishuError]) -> None:
    err = error_cls("x", api_domain="auth", api_name="tenant_access_token_internal")
    assert isinstance(err, FeishuError)
    assert err.cause == "x"


def test_unsupported_operation_message() -> None:
    err = UnsupportedOperationError(api_domain="auth", api_name="app_access_token_internal")
    assert str(err) == "[auth] app_access_token_internal: not supported"
    assert err.request_id == ""


def test_api_error_is_feishu_error() -> None:
    assert isinstance(ApiError(1, "x"), FeishuError)


def test_security_error_is_value_error() -> None:
    assert issubclass(SecurityError, ValueError)
    assert not issubclass(SecurityError, FeishuError)
