import json

import httpx

BACKEND_URL = "https://backend.test"


class RecordingBackend:
    """httpx handler that records every request and replies with a canned response."""

    def __init__(self, status_code=200, body=None, content=None, error=None):
        self.status_code = status_code
        self.body = body
        self.content = content
        self.error = error
        self.requests = []

    @property
    def calls(self):
        return len(self.requests)

    def last_json(self):
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)
