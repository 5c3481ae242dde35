"""Stand-ins for requests.Session / requests.Response used across the tests"""

import json
import threading
from urllib.parse import parse_qsl, urlsplit


class StubResponse:
    def __init__(self, status_code=200, body=None, reason=None, headers=None, raw=None):
        self.status_code = status_code
        self.reason = reason or ("OK" if status_code < 400 else "Bad Request")
        self.headers = headers or {"Content-Type": "application/json"}
        if raw is not None:
            self.content = raw.encode("utf-8")
        elif body is not None:
            self.content = json.dumps(body).encode("utf-8")
        else:
            self.content = b""

    @property
    def text(self):
        return self.content.decode("utf-8")

    def json(self):
        # Same failure type as requests (JSONDecodeError is a ValueError)
        return json.loads(self.content)


class RecordedCall:
    def __init__(self, method, url, data, headers, timeout):
        self.method = method
        self.url = url
        self.data = data
        self.headers = headers
        self.timeout = timeout

    @property
    def path(self):
        return urlsplit(self.url).path

    @property
    def query(self):
        return urlsplit(self.url).query

    @property
    def params(self):
        return dict(parse_qsl(self.query))

    @property
    def body_text(self):
        return self.data.decode("utf-8") if self.data else ""

    @property
    def json(self):
        return json.loads(self.body_text) if self.data else None


class StubSession:
    """
    Records every request. Answers from a queue of responses, or from a
    handler(call) when one is given. Exceptions are raised instead of returned.
    """

    def __init__(self, *responses, handler=None):
        self.calls = []
        self.closed = False
        self._responses = list(responses)
        self._handler = handler
        self._lock = threading.Lock()

    def request(self, method, url, data=None, headers=None, timeout=None):
        call = RecordedCall(method, url, data, headers or {}, timeout)
        with self._lock:
            self.calls.append(call)
            if self._handler is not None:
                result = None
            elif self._responses:
                result = self._responses.pop(0)
            else:
                result = StubResponse(200, {})

        if self._handler is not None:
            result = self._handler(call)
        if isinstance(result, Exception):
            raise result
        return result

    def close(self):
        self.closed = True
