import json
from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio

from libellus.bridge import ApiClient, PersistenceBridge

STORAGE_URL = "http://storage.test/api"
STORAGE_TOKEN = "secret-token"


def _now():
    return datetime.now(timezone.utc).isoformat()


def _ok(data=None, message=None, status_code=200):
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return httpx.Response(status_code, json=body)


def _fail(message, status_code):
    return httpx.Response(status_code, json={"success": False, "message": message})


class FakeStorage(object):
    """
    In-memory stand-in of the form storage REST API, served through
    `httpx.MockTransport`. Every request is recorded in `requests`.
    """

    def __init__(self):
        self.forms = {}
        self.submissions = {}
        self.requests = []
        self.down = False
        self.refuse_submissions = False
        self._counter = 0

    def next_id(self, prefix):
        self._counter += 1
        return f"{prefix}-{self._counter}"

    def add_form(self, name="Contact", elements=None, status=1, **extra):
        form_id = extra.pop("id", None) or self.next_id("form")
        self.forms[form_id] = {
            "id": form_id,
            "name": name,
            "description": extra.pop("description", ""),
            "elements": list(elements or []),
            "status": status,
            "created_at": _now(),
            **extra,
        }
        return form_id

    def add_submission(self, form_id, data):
        submission_id = self.next_id("sub")
        self.submissions[submission_id] = {
            "id": submission_id,
            "form_id": form_id,
            "data": data,
            "created_at": _now(),
        }
        return submission_id

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self):
        return json.loads(self.last_request.content or b"null")

    def transport(self):
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.down:
            raise httpx.ConnectError("Connection refused", request=request)

        parts = request.url.path.strip("/").split("/")[1:]
        body = json.loads(request.content) if request.content else None
        method = request.method

        if parts[:1] == ["admin"]:
            if request.headers.get("Authorization") != f"Bearer {STORAGE_TOKEN}":
                return _fail("Unauthorized", 401)
            return self.admin(method, parts[1:], body, request)

        if parts == ["submission"] and method == "POST":
            if self.refuse_submissions:
                raise httpx.ConnectError("Connection reset", request=request)
            if body["form_id"] not in self.forms:
                return _fail("Form not found", 404)
            submission_id = self.add_submission(body["form_id"], body["data"])
            return _ok(self.submissions[submission_id], "Submission created", 201)

        if len(parts) == 2 and parts[0] == "form" and method == "GET":
            form = self.forms.get(parts[1])
            return _ok(form) if form else _fail("Form not found", 404)

        return _fail("Route not found", 404)

    def admin(self, method, parts, body, request):  # noqa: C901
        resource, rest = parts[0], parts[1:]
        table = self.forms if resource == "form" else self.submissions

        if not rest:
            if method == "GET" and resource == "form":
                return _ok(list(self.forms.values()))

            if method == "GET":
                form_id = request.url.params.get("form_id")
                return _ok([s for s in self.submissions.values() if s["form_id"] == form_id])

            if method == "POST" and resource == "form":
                form_id = self.add_form(**body, status=0)
                return _ok({"id": form_id}, "Form created successfully", 201)

        item = table.get(rest[0]) if rest else None
        if item is None:
            return _fail(f"{resource.capitalize()} not found", 404)

        if rest[1:] == ["status"] and method == "PATCH":
            item["status"] = 0 if item["status"] else 1
            return _ok(item, "Form status updated")

        if method == "GET":
            return _ok(item)

        if method == "PATCH":
            item.update(body or {}, updated_at=_now())
            return _ok(item, f"{resource.capitalize()} updated")

        if method == "DELETE":
            del table[rest[0]]
            return _ok(message=f"{resource.capitalize()} deleted")

        return _fail("Method not allowed", 405)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def api_client(storage):
    return ApiClient(base_url=STORAGE_URL, token=STORAGE_TOKEN, transport=storage.transport())


@pytest_asyncio.fixture
async def bridge(api_client):
    async with PersistenceBridge(api_client) as bridge:
        yield bridge
