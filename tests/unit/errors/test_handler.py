"""Tests for error handling utilities."""

import pytest
from httpx import Response

from yuihub_client_core.errors.exceptions import (
    APIError,
    AuthError,
    ClientError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from yuihub_client_core.errors.handler import exception_class_for, raise_for_status


@pytest.mark.unit
def test_raise_for_status_success_response():
    """Test raise_for_status doesn't raise for successful responses."""
    response = Response(status_code=200)

    # Should not raise
    raise_for_status(response)


@pytest.mark.unit
def test_raise_for_status_204_no_content():
    raise_for_status(Response(status_code=204))


@pytest.mark.unit
def test_raise_for_status_401_unauthorized():
    """Test raise_for_status raises UnauthorizedError for 401."""
    response = Response(status_code=401, text="Unauthorized")

    with pytest.raises(UnauthorizedError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.status_code == 401
    assert exc_info.value.reason == "Unauthorized"
    assert exc_info.value.requires_reauthentication


@pytest.mark.unit
def test_raise_for_status_403_forbidden():
    """Test raise_for_status raises ForbiddenError for 403."""
    response = Response(status_code=403, text="Forbidden")

    with pytest.raises(ForbiddenError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.status_code == 403
    assert isinstance(exc_info.value, AuthError)
    assert not exc_info.value.requires_reauthentication


@pytest.mark.unit
def test_raise_for_status_404_not_found():
    """Test raise_for_status raises NotFoundError for 404."""
    response = Response(status_code=404, text="Not found")

    with pytest.raises(NotFoundError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.status_code == 404


@pytest.mark.unit
def test_raise_for_status_other_4xx():
    """Test raise_for_status raises ClientError for unmapped 4xx."""
    with pytest.raises(ClientError) as exc_info:
        raise_for_status(Response(status_code=418))

    assert type(exc_info.value) is ClientError


@pytest.mark.unit
@pytest.mark.parametrize("status", [500, 502, 503])
def test_raise_for_status_5xx(status):
    """Test raise_for_status raises ServerError for 5xx."""
    with pytest.raises(ServerError) as exc_info:
        raise_for_status(Response(status_code=status))

    assert exc_info.value.status_code == status


@pytest.mark.unit
def test_raise_for_status_unusual_status():
    """Test raise_for_status raises APIError for non-4xx/5xx failures."""
    with pytest.raises(APIError) as exc_info:
        raise_for_status(Response(status_code=304))

    assert type(exc_info.value) is APIError


@pytest.mark.unit
def test_message_without_snippet():
    with pytest.raises(ServerError) as exc_info:
        raise_for_status(Response(status_code=500))

    assert str(exc_info.value) == "HTTP 500 Internal Server Error"
    assert exc_info.value.body_snippet is None


@pytest.mark.unit
def test_message_with_snippet():
    with pytest.raises(ServerError) as exc_info:
        raise_for_status(Response(status_code=500), body_snippet="database unavailable")

    assert str(exc_info.value) == "HTTP 500 Internal Server Error: database unavailable"
    assert exc_info.value.body_snippet == "database unavailable"


@pytest.mark.unit
def test_body_is_not_read_by_handler():
    """The handler only uses the status line; the body is the caller's business."""
    response = Response(status_code=400, text="secret body")

    with pytest.raises(ClientError) as exc_info:
        raise_for_status(response)

    assert "secret body" not in str(exc_info.value)


@pytest.mark.unit
def test_exception_class_for():
    assert exception_class_for(401) is UnauthorizedError
    assert exception_class_for(403) is ForbiddenError
    assert exception_class_for(404) is NotFoundError
    assert exception_class_for(409) is ClientError
    assert exception_class_for(599) is ServerError
