"""Unit tests for core/exceptions.py."""

import pytest

from core.exceptions import (
    DecodeError,
    MalformedRequestError,
    MovieSearchError,
    TransportError,
)


class TestMovieSearchError:
    """Tests for the base exception class."""

    def test_message_attribute(self):
        err = MovieSearchError("something went wrong")
        assert err.message == "something went wrong"
        assert str(err) == "something went wrong"

    def test_details_default_empty(self):
        assert MovieSearchError("msg").details == {}

    def test_details_provided(self):
        err = MovieSearchError("msg", details={"key": "val"})
        assert err.details == {"key": "val"}

    def test_cause_default_none(self):
        assert MovieSearchError("msg").cause is None

    def test_cause_provided(self):
        cause = OSError("reset")
        assert MovieSearchError("msg", cause=cause).cause is cause


SUBCLASSES = [MalformedRequestError, TransportError, DecodeError]


@pytest.mark.parametrize("cls", SUBCLASSES, ids=lambda c: c.__name__)
class TestExceptionSubclasses:
    """All subclasses inherit from MovieSearchError and carry message/details/cause."""

    def test_inherits_from_base(self, cls):
        assert isinstance(cls("test"), MovieSearchError)

    def test_message_details_cause(self, cls):
        cause = ValueError("inner")
        err = cls("detail msg", details={"a": 1}, cause=cause)
        assert err.message == "detail msg"
        assert err.details == {"a": 1}
        assert err.cause is cause


def test_error_kinds_are_distinct():
    assert not issubclass(TransportError, DecodeError)
    assert not issubclass(DecodeError, TransportError)
    assert not issubclass(MalformedRequestError, TransportError)
