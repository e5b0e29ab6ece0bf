import asyncio

import pytest

from libellus.builder import FormBuilder
from libellus.error import BadRequestError, ConflictError


async def test_save_rejects_empty_canvas(bridge, storage):
    builder = FormBuilder(bridge)

    with pytest.raises(BadRequestError) as excinfo:
        await builder.save()

    assert excinfo.value.errcode == "B00.401"
    assert storage.requests == []


async def test_save_rejects_blank_name(bridge, storage):
    builder = FormBuilder(bridge)
    builder.canvas.add_instance("TextField")

    with pytest.raises(BadRequestError):
        await builder.save(name="   ")

    assert storage.requests == []


async def test_save_creates_then_updates(bridge, storage):
    builder = FormBuilder(bridge, name="Contact")
    field = builder.canvas.add_instance("TextField")

    form_id = await builder.save(description="Reach us")
    assert form_id in storage.forms
    assert storage.last_request.method == "POST"
    assert storage.last_body() == {
        "name": "Contact",
        "description": "Reach us",
        "elements": [{"id": field.id, "type": "TextField", "extra_attributes": field.attributes}],
    }

    builder.edit().set("label", "Email").submit()
    assert await builder.save() == form_id
    assert storage.last_request.method == "PATCH"
    assert storage.forms[form_id]["elements"][0]["extra_attributes"]["label"] == "Email"
    assert storage.forms[form_id]["description"] == "Reach us"


async def test_concurrent_save_is_refused():
    release = asyncio.Event()

    class SlowBridge(object):
        async def save(self, form):
            await release.wait()
            return "form-slow"

    builder = FormBuilder(SlowBridge())
    builder.canvas.add_instance("TextField")

    pending = asyncio.ensure_future(builder.save())
    await asyncio.sleep(0)
    assert builder.is_saving

    with pytest.raises(ConflictError):
        await builder.save()

    release.set()
    assert await pending == "form-slow"
    assert not builder.is_saving


async def test_resume(bridge, storage):
    form_id = storage.add_form("Survey", description="Yearly", elements=[
        {"id": "e1", "type": "Title", "extra_attributes": {"title": "Survey"}},
        {"id": "e2", "type": "Slider", "extra_attributes": {"label": "Score"}},
    ])

    builder = FormBuilder(bridge)
    form = await builder.resume(form_id)

    assert form.name == "Survey"
    assert builder.form_id == form_id
    assert builder.name == "Survey"
    assert builder.description == "Yearly"
    assert builder.published is True
    assert [e.id for e in builder.canvas] == ["e1", "e2"]
    assert builder.edit("e2").values["max"] == 100

    await builder.save()
    assert storage.last_request.method == "PATCH"
