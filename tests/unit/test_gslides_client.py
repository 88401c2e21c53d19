"""Test the Slides API wrapper and error classification."""

import json
from unittest.mock import MagicMock

import httplib2
import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from md2slides.errors import LayoutNotFoundError, SlidesAPIError, UpstreamAuthError
from md2slides.gslides_client import SlidesClient, classify_http_error, presentation_url


def make_http_error(status, message):
    resp = httplib2.Response({"status": status})
    content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
    return HttpError(resp, content)


def test_presentation_url():
    assert presentation_url("abc") == "https://docs.google.com/presentation/d/abc/edit"


def test_layout_not_found_is_classified():
    err = classify_http_error(make_http_error(400, "Invalid requests[0].createSlide: LAYOUT_NOT_FOUND"))

    assert isinstance(err, LayoutNotFoundError)
    assert err.status_code == 500
    assert "TITLE_AND_BODY" in err.user_message


def test_other_400_is_generic():
    err = classify_http_error(make_http_error(400, "Invalid requests[2].insertText"))

    assert type(err) is SlidesAPIError
    assert err.http_status == 400
    assert "insertText" in err.user_message


def test_unauthorized_is_classified():
    err = classify_http_error(make_http_error(401, "Request had invalid authentication credentials."))

    assert isinstance(err, UpstreamAuthError)
    assert err.status_code == 401


@pytest.fixture
def service():
    service = MagicMock()
    service.presentations.return_value.create.return_value.execute.return_value = {"presentationId": "p1"}
    service.presentations.return_value.batchUpdate.return_value.execute.return_value = {"replies": []}
    return service


def test_create_presentation(service):
    client = SlidesClient(service)

    assert client.create_presentation("Deck") == "p1"
    service.presentations.return_value.create.assert_called_once_with(body={"title": "Deck"})


def test_batch_update_sends_one_request(service):
    client = SlidesClient(service)
    requests = [{"insertText": {"objectId": "x_title_1", "text": "hi"}}]

    client.batch_update("p1", requests)

    service.presentations.return_value.batchUpdate.assert_called_once_with(
        presentationId="p1", body={"requests": requests}
    )


def test_empty_batch_is_not_sent(service):
    SlidesClient(service).batch_update("p1", [])

    service.presentations.return_value.batchUpdate.assert_not_called()


def test_http_error_is_translated(service):
    service.presentations.return_value.create.return_value.execute.side_effect = make_http_error(
        401, "expired"
    )

    with pytest.raises(UpstreamAuthError):
        SlidesClient(service).create_presentation("Deck")


def test_refresh_failure_is_an_auth_error(service):
    service.presentations.return_value.batchUpdate.return_value.execute.side_effect = RefreshError(
        "invalid_grant: Token has been expired or revoked."
    )

    with pytest.raises(UpstreamAuthError) as excinfo:
        SlidesClient(service).batch_update("p1", [{"insertText": {"objectId": "x_title_1", "text": "hi"}}])

    assert excinfo.value.status_code == 401
