"""Stand-ins for requests objects used by the client and CLI tests."""

import json

import requests


class FakeResponse:
    """Minimal requests.Response stand-in."""

    def __init__(self, status_code=200, body=None, content_type="application/json"):
        self.status_code = status_code
        if body is None:
            self.text = ""
        elif isinstance(body, str):
            self.text = body
        else:
            self.text = json.dumps(body)
        self.headers = {"content-type": content_type} if content_type else {}

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records POSTs and replays a canned response (or raises)."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


