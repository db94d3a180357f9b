"""Unit tests for the exception hierarchy."""

from pagewalk.core import (
    AuthError,
    AuthFailedError,
    ChannelClosedError,
    DecodeError,
    DecodeFailedError,
    FetchError,
    PagingError,
    RequestFailedError,
    TransportError,
)


def test_transport_error_with_status_code():
    error = TransportError("bad gateway", status_code=502)
    assert str(error) == "bad gateway"
    assert error.status_code == 502
    assert isinstance(error, PagingError)


def test_decode_error_is_transport_error():
    error = DecodeError("not json")
    assert isinstance(error, TransportError)
    assert error.status_code is None


def test_fetch_errors_carry_walk_context():
    error = RequestFailedError("failed", page_index=0, cursor=None, status_code=500)
    assert error.page_index == 0
    assert error.status_code == 500
    assert isinstance(error, FetchError)


def test_walk_errors_are_distinct_from_collaborator_errors():
    for cls in (AuthFailedError, RequestFailedError, DecodeFailedError):
        assert issubclass(cls, FetchError)
        assert not issubclass(cls, TransportError)
    assert not issubclass(AuthError, FetchError)


def test_channel_closed_error():
    assert isinstance(ChannelClosedError("closed"), PagingError)
