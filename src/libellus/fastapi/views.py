from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from libellus.bridge import PersistenceBridge
from libellus.element import ElementRegistry, palette, renderer
from libellus.error import BadRequestError, InternalServerError, RequiredFieldsMissing, StorageError
from libellus.intake import SubmissionIntake

from ._meta import config, logger
from .helper import read_form_values, uri
from .setup import app_bridge, attach_bridge


def get_bridge(request: Request) -> PersistenceBridge:
    bridge = app_bridge(request.app)
    if bridge is None:
        raise InternalServerError("A00.501", "Form storage is not configured for this application", None)

    return bridge


async def read_submission_fields(request: Request, is_json: bool):
    if not is_json:
        return dict(await request.form())

    try:
        body = await request.json()
    except ValueError:
        raise BadRequestError("A00.401", "Submission body is not valid JSON")

    fields = body.get("data") if isinstance(body, dict) else None
    if not isinstance(fields, dict):
        raise BadRequestError("A00.402", "Submission body must be an object with a `data` mapping")

    return fields


def configure_form_views(app: FastAPI, bridge=None, base_path="/") -> FastAPI:
    """
    Register the element palette endpoints and the public form pages on `app`.

    Without an explicit `bridge` the one given to `create_app` is used, or a
    default `PersistenceBridge` built from configuration.
    """
    attach_bridge(app, bridge or app_bridge(app) or PersistenceBridge())

    def api(*paths, method=app.get, tags=("Form Builder",), **kwargs):
        return method(uri(base_path, *paths), tags=list(tags), **kwargs)

    @api("element-types")
    async def list_element_types():
        """List all registered element types"""
        return {"element_types": palette()}

    @api("element-schema/{element_key}")
    async def get_element_schema(element_key: str):
        """Get JSON schema for a specific element type"""
        # Registry.get raises NotFoundError if not found
        element_cls = ElementRegistry.get(element_key)

        return {
            "key": element_cls.Meta.key,
            "title": element_cls.Meta.title,
            "description": element_cls.Meta.description,
            "schema": element_cls.json_schema(),
        }

    @api("form/{form_id}", tags=("Public Form",), response_class=HTMLResponse)
    async def view_form(request: Request, form_id: str):
        form = await get_bridge(request).public.fetch(form_id)
        action = request.url.path.rstrip('/') + "/submission"
        return HTMLResponse(renderer.render_form(form, action=action))

    @api("form/{form_id}/submission", method=app.post, tags=("Public Form",))
    async def submit_form(request: Request, form_id: str):
        bridge = get_bridge(request)
        is_json = request.headers.get("content-type", "").startswith("application/json")
        fields = await read_submission_fields(request, is_json)

        form = await bridge.public.fetch(form_id)
        intake = SubmissionIntake(form, bridge)
        intake.update(read_form_values(form, fields))

        if is_json:
            record = await intake.submit()
            return {
                "success": True,
                "message": config.FORM_SUBMITTED_MESSAGE,
                "data": record.serialize(),
            }

        action = request.url.path
        try:
            await intake.submit()
        except RequiredFieldsMissing as e:
            logger.info('Submission to form [%s] rejected: %s', form_id, e.message)
            html = renderer.render_form(form, intake.values, e.errors, action=action, message=e.message)
            return HTMLResponse(html, status_code=422)
        except StorageError as e:
            logger.warning('Submission to form [%s] not stored: %s', form_id, e)
            html = renderer.render_form(form, intake.values, action=action, message=e.message)
            return HTMLResponse(html, status_code=e.status_code)

        html = renderer.render_form(form, action=action, message=config.FORM_SUBMITTED_MESSAGE)
        return HTMLResponse(html)

    return app
