"""
Unit tests for the negotiated response.
"""

from negotiator.http import (
    HTTPResponse,
    HTTPStatus,
    http_error,
)


class TestHTTPResponse:
    """Tests for HTTPResponse."""

    def test_set_status_unknown_code(self):
        """Test that codes without a phrase are kept as integers."""
        response = HTTPResponse().set_status(299)

        assert response.status == 299
        assert not isinstance(response.status, HTTPStatus)

    def test_set_header_chaining(self):
        """Test that setters return self."""
        response = HTTPResponse().set_content_type("text/csv").set_header("X-Test", "1")

        assert response.headers == {"Content-Type": "text/csv", "X-Test": "1"}

    def test_write(self):
        """Test that write() encodes text and returns the byte count."""
        response = HTTPResponse()

        assert response.write("café") == 5
        assert response.write(b"!") == 1
        assert response.body == "café!".encode("utf-8")
        assert response.text == "café!"

    def test_add_vary(self):
        """Test that Vary values are merged without duplicates."""
        response = HTTPResponse()

        response.add_vary("Accept")
        response.add_vary("Accept", "Accept-Language")

        assert response.headers["Vary"] == "Accept, Accept-Language"

    def test_add_vary_nothing(self):
        """Test that no names add no header."""
        assert "Vary" not in HTTPResponse().add_vary().headers

    def test_reset(self):
        """Test that reset() discards status, headers and body."""
        response = HTTPResponse(status=HTTPStatus.NO_CONTENT)
        response.set_header("X-Test", "1").write("partial")

        response.reset()

        assert response.status == HTTPStatus.OK
        assert response.headers == {}
        assert response.body == b""


class TestHTTPError:
    """Tests for the default error handler."""

    def test_writes_plain_text(self):
        """Test the error response."""
        response = HTTPResponse()
        response.set_content_type("application/json").write('{"partial"')

        http_error(response, "Internal Server Error", 500)

        assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.headers == {
            "Content-Type": "text/plain; charset=utf-8",
            "X-Content-Type-Options": "nosniff",
        }
        assert response.text == "Internal Server Error\n"


class TestHTTPStatus:
    """Tests for HTTPStatus enum."""

    def test_status_phrases(self):
        """Test the negotiation status phrases."""
        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.NO_CONTENT.phrase == "No Content"
        assert HTTPStatus.NOT_ACCEPTABLE.phrase == "Not Acceptable"

    def test_status_categories(self):
        """Test status category helpers."""
        assert HTTPStatus.OK.is_success
        assert HTTPStatus.NOT_ACCEPTABLE.is_client_error
        assert HTTPStatus.INTERNAL_SERVER_ERROR.is_server_error
        assert HTTPStatus.NOT_ACCEPTABLE.is_error
        assert not HTTPStatus.NO_CONTENT.is_error
