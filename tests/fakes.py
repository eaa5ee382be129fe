"""Test doubles: a scripted stand-in for `requests.Session` and response builders."""

import json
from collections import namedtuple

import requests

from common.api import ApiClient
from common.session import AdminSession

BASE_URL = "http://api.test"
TOKEN = "tok-123"

Call = namedtuple("Call", "method path headers json files")


def make_response(status=200, body=None, reason=None):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason or ("OK" if status < 400 else "Error")
    if body is None:
        resp._content = b""
    elif isinstance(body, bytes):
        resp._content = body
    else:
        resp._content = json.dumps(body).encode()
    return resp


class FakeHttp:
    """Answers requests from per-route queues; the last queued answer repeats."""

    def __init__(self):
        self.headers = {}
        self.routes = {}
        self.calls = []

    def add(self, method, path, *answers):
        self.routes.setdefault((method, path), []).extend(answers)
        return self

    def request(self, method, url, **kwargs):
        path = url[len(BASE_URL):]
        self.calls.append(Call(method, path, kwargs.get("headers") or {}, kwargs.get("json"), kwargs.get("files")))
        queue = self.routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request {method} {path}")
        answer = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def calls_to(self, method, path):
        return [c for c in self.calls if c.method == method and c.path == path]


def make_client(token=TOKEN):
    http = FakeHttp()
    session = AdminSession()
    if token:
        session.start(token)
    return ApiClient(base_url=BASE_URL, session=session, http=http), http


class NoticeLog:
    def __init__(self):
        self.items = []

    def __call__(self, level, message):
        self.items.append((level, message))

    def messages(self, level=None):
        return [m for lvl, m in self.items if level is None or lvl == level]
