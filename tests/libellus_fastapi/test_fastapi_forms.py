"""
Tests for the public form application: palette endpoints, rendered form
pages and the submission endpoint.
"""
import pytest
from httpx import ASGITransport, AsyncClient

from libellus.bridge import PersistenceBridge
from libellus.fastapi import app_bridge, configure_form_views, create_app

ELEMENTS = [
    {"id": "title", "type": "Title", "extra_attributes": {"title": "Contact us"}},
    {"id": "name", "type": "TextField", "extra_attributes": {"label": "Your name", "required": True}},
    {"id": "agree", "type": "Checkbox", "extra_attributes": {"label": "Subscribe"}},
    {"id": "score", "type": "Slider", "extra_attributes": {"label": "Score"}},
    {"id": "odd", "type": "Signature", "extra_attributes": {"label": "Sign"}},
]


@pytest.fixture
def app(bridge):
    app = create_app()
    configure_form_views(app, bridge)
    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def form_id(storage):
    return storage.add_form("Contact", ELEMENTS, description="We answer fast")


async def test_application_metadata(client):
    response = await client.get("/_meta")
    assert response.status_code == 200
    assert response.json()["name"] == "Libellus Forms"


async def test_list_element_types(client):
    response = await client.get("/element-types")
    assert response.status_code == 200

    keys = [et["key"] for et in response.json()["element_types"]]
    assert {"TextField", "Textarea", "Title", "Checkbox", "Select", "Switch", "Slider"} <= set(keys)


async def test_get_element_schema(client):
    response = await client.get("/element-schema/Select")
    assert response.status_code == 200

    data = response.json()
    assert data["key"] == "Select"
    assert data["title"] == "Select"
    assert "options" in data["schema"]["properties"]


async def test_get_element_schema_not_found(client):
    response = await client.get("/element-schema/Signature")
    assert response.status_code == 404

    data = response.json()
    assert data["success"] is False
    assert data["errcode"] == "H00.401"


async def test_view_form(client, form_id):
    response = await client.get(f"/form/{form_id}")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")

    html = response.text
    assert "We answer fast" in html
    assert "Your name" in html
    assert f'action="/form/{form_id}/submission"' in html
    assert "Sign" not in html


async def test_view_missing_form(client):
    response = await client.get("/form/missing")
    assert response.status_code == 404
    assert response.json()["message"] == "Form not found"


async def test_submit_json(client, storage, form_id):
    response = await client.post(f"/form/{form_id}/submission", json={
        "data": {"name": "Ann", "agree": True, "score": 70, "odd": "x"},
    })
    assert response.status_code == 200

    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Form submitted successfully!"
    assert body["data"]["form_id"] == form_id
    assert body["data"]["data"] == {"name": "Ann", "agree": True, "score": 70}

    stored = storage.submissions[body["data"]["id"]]
    assert stored["data"]["name"] == "Ann"


async def test_submit_json_missing_required(client, storage, form_id):
    response = await client.post(f"/form/{form_id}/submission", json={"data": {"name": " "}})
    assert response.status_code == 422

    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Please fill in: Your name"
    assert body["details"] == {"name": "Your name is required"}
    assert storage.submissions == {}


async def test_submit_json_bad_body(client, form_id):
    response = await client.post(f"/form/{form_id}/submission", json={"name": "Ann"})
    assert response.status_code == 400
    assert response.json()["errcode"] == "A00.402"


async def test_submit_html_form(client, storage, form_id):
    response = await client.post(f"/form/{form_id}/submission", data={"name": "Ann", "score": "40"})
    assert response.status_code == 200
    assert "Form submitted successfully!" in response.text

    (stored,) = storage.submissions.values()
    assert stored["data"] == {"name": "Ann", "agree": False, "score": 40.0}


async def test_submit_html_form_missing_required(client, storage, form_id):
    response = await client.post(f"/form/{form_id}/submission", data={"agree": "true"})
    assert response.status_code == 422
    assert "Please fill in: Your name" in response.text
    assert "Your name is required" in response.text
    assert storage.submissions == {}


async def test_storage_failure(client, storage, form_id):
    storage.down = True

    response = await client.post(f"/form/{form_id}/submission", json={"data": {"name": "Ann"}})
    assert response.status_code == 502
    assert response.json()["errcode"] == "S00.501"


async def test_submit_html_form_storage_failure(client, storage, form_id):
    storage.refuse_submissions = True

    response = await client.post(f"/form/{form_id}/submission", data={"name": "Ann", "score": "40"})
    assert response.status_code == 502
    assert response.headers["content-type"].startswith("text/html")
    assert "Unable to reach the form storage" in response.text
    assert 'value="Ann"' in response.text
    assert storage.submissions == {}


async def test_application_metadata_describes_forms(client):
    data = (await client.get("/_meta")).json()
    assert {"name", "version", "framework", "build_time"} <= set(data)
    assert {"TextField", "Checkbox", "Select"} <= set(data["element_types"])
    assert data["storage"] == "http://storage.test/api"


async def test_shutdown_closes_bridge(storage):
    closed = []

    class TrackedBridge(PersistenceBridge):
        async def close(self):
            closed.append(self)
            await super().close()

    bridge = TrackedBridge(base_url="http://storage.test/api", transport=storage.transport())
    app = configure_form_views(create_app(bridge))
    assert app_bridge(app) is bridge

    async with app.router.lifespan_context(app):
        assert closed == []

    assert closed == [bridge]
