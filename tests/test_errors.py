"""describe_error: the three kinds of failure shown in the error slot."""

import json

from randompeople.errors import (
    NETWORK_ERROR_MESSAGE,
    HttpStatusError,
    NetworkError,
    TransportError,
    describe_error,
)


def test_http_status_with_reason():
    assert describe_error(HttpStatusError(404, "Not Found")) == "HTTP error: 404 - Not Found"


def test_http_status_without_reason():
    assert describe_error(HttpStatusError(502)) == "HTTP error: 502"


def test_network_error_hides_details():
    assert describe_error(NetworkError("[Errno -2] Name or service not known")) == NETWORK_ERROR_MESSAGE


def test_other_exceptions_use_their_message():
    exc = json.JSONDecodeError("Expecting value", "oops", 0)
    assert describe_error(exc) == "Unexpected error: Expecting value: line 1 column 1 (char 0)"


def test_exception_without_message_uses_its_type():
    assert describe_error(KeyError()) == "Unexpected error: KeyError"


def test_hierarchy():
    assert issubclass(HttpStatusError, TransportError)
    assert issubclass(NetworkError, TransportError)
    assert str(HttpStatusError(500, "Internal Server Error")) == "500 - Internal Server Error"
