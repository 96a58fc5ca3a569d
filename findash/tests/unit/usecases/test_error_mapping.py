from __future__ import annotations

import pytest

from findash.adapters.api_errors import ApiError, TransportError
from findash.domain.ports import UseCaseError
from findash.usecases.error_mapping import map_api_error


@pytest.mark.parametrize(
    "exc, code",
    [
        (TransportError("refused"), "API_UNREACHABLE"),
        (TransportError("bad json", status=200), "INVALID_RESPONSE"),
        (TransportError("boom", status=502), "SERVER_ERROR"),
        (TransportError("nope", status=404), "REQUEST_FAILED"),
        (ApiError("other"), "API_ERROR"),
        (RuntimeError("weird"), "FALLBACK"),
    ],
)
def test_map_api_error_codes(exc: Exception, code: str) -> None:
    assert map_api_error(exc, default_code="FALLBACK").code == code


def test_client_error_message_includes_hint() -> None:
    err = TransportError("ctx", status=422, hint="email already registered")

    mapped = map_api_error(err, default_code="X")

    assert mapped.message == "Request failed (HTTP 422): email already registered"


def test_use_case_errors_pass_through() -> None:
    original = UseCaseError("SOME_CODE", "kept")

    assert map_api_error(original, default_code="X") is original


def test_unknown_error_uses_default_message() -> None:
    mapped = map_api_error(ValueError(""), default_code="X", default_message="Fallback text.")

    assert mapped.message == "Fallback text."
