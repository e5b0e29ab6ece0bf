import json

import httpx
import pytest

from libellus.bridge import ApiClient, PersistenceBridge, token_from_cookies
from libellus.error import NotFoundError, StorageError, UnauthorizedError

STORAGE_URL = "http://storage.test/api"


def client_for(handler, **kwargs):
    return ApiClient(base_url=STORAGE_URL, transport=httpx.MockTransport(handler), **kwargs)


def test_token_from_cookies():
    assert token_from_cookies({"token": "abc"}) == "abc"
    assert token_from_cookies({"token": ""}) is None
    assert token_from_cookies({"other": "abc"}) is None
    assert token_from_cookies(None) is None
    assert token_from_cookies({"sid": "xyz"}, "sid") == "xyz"


async def test_bearer_token_from_cookie():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"success": True, "data": []})

    async with client_for(handler, cookies={"token": "cookie-token"}) as client:
        resp = await client.get("admin/form")

    assert resp.success is True
    assert resp.data == []
    assert seen[0].headers["Authorization"] == "Bearer cookie-token"
    assert str(seen[0].url) == f"{STORAGE_URL}/admin/form"


async def test_no_token_no_header():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"success": True})

    async with client_for(handler) as client:
        await client.get("form/abc")

    assert "Authorization" not in seen[0].headers


async def test_query_params_and_json_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json={"success": True, "message": "Created", "data": {"id": "x"}})

    async with client_for(handler) as client:
        await client.get("admin/submission", form_id="f1")
        resp = await client.post("submission", {"form_id": "f1", "data": {"a": 1}})

    assert seen[0].url.params["form_id"] == "f1"
    assert json.loads(seen[1].content) == {"form_id": "f1", "data": {"a": 1}}
    assert resp.message == "Created"


@pytest.mark.parametrize("status_code, body, error", [
    (404, {"success": False, "message": "Form not found"}, NotFoundError),
    (401, {"success": False, "message": "Unauthorized"}, UnauthorizedError),
    (500, {"success": False, "message": "Boom"}, StorageError),
    (200, {"success": False, "message": "Refused"}, StorageError),
])
async def test_error_envelopes(status_code, body, error):
    async with client_for(lambda request: httpx.Response(status_code, json=body)) as client:
        with pytest.raises(error) as excinfo:
            await client.get("admin/form/1")

    assert excinfo.value.message == body["message"]


async def test_non_json_response():
    async with client_for(lambda request: httpx.Response(502, text="<html>Bad gateway</html>")) as client:
        with pytest.raises(StorageError) as excinfo:
            await client.get("admin/form")

    assert excinfo.value.errcode == "S00.502"


async def test_empty_success_response():
    seen = []

    def handler(request):
        seen.append(request.method)
        return httpx.Response(204)

    async with client_for(handler, token="t") as client:
        resp = await client.delete("admin/form/form-1")
        assert resp.success is True
        assert resp.data is None

        await PersistenceBridge(client).delete("form-1")

    assert seen == ["DELETE", "DELETE"]


async def test_empty_error_response():
    async with client_for(lambda request: httpx.Response(500)) as client:
        with pytest.raises(StorageError) as excinfo:
            await client.delete("admin/form/form-1")

    assert excinfo.value.errcode == "S00.502"


async def test_transport_failure():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    async with client_for(handler) as client:
        with pytest.raises(StorageError) as excinfo:
            await client.delete("admin/form/1")

    assert excinfo.value.errcode == "S00.501"
    assert excinfo.value.status_code == 502


async def test_close_is_idempotent():
    client = client_for(lambda request: httpx.Response(200, json={"success": True}))
    await client.get("form/1")
    await client.close()
    await client.close()
