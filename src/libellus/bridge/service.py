"""
Services of the form-storage API and the persistence bridge used by the builder.

The admin services require a bearer token; the public service serves the
rendered form and accepts end-user submissions.
"""
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from libellus.builder.model import FormDefinition, SubmissionRecord
from libellus.error import NotFoundError, StorageError

from ._meta import logger
from .client import ApiClient, ApiResponse

URL_ADMIN_FORMS        = "admin/form"
URL_ADMIN_FORM         = "admin/form/{form_id}"
URL_ADMIN_FORM_STATUS  = "admin/form/{form_id}/status"
URL_ADMIN_SUBMISSIONS  = "admin/submission"
URL_ADMIN_SUBMISSION   = "admin/submission/{submission_id}"
URL_PUBLIC_FORM        = "form/{form_id}"
URL_PUBLIC_SUBMISSIONS = "submission"


def _parse(model, data, resource):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Malformed %s returned by storage: %s", resource, e)
        raise StorageError(
            "S00.504",
            f"Form storage returned a malformed {resource}",
            {"errors": e.errors(include_url=False, include_context=False)}
        ) from e


def _parse_one(model, resp: ApiResponse, resource, identifier):
    if not resp.data:
        raise NotFoundError("S00.404", f"{resource.capitalize()} [{identifier}] not found")

    return _parse(model, resp.data, resource)


def _parse_many(model, resp: ApiResponse, resource):
    return [_parse(model, item, resource) for item in (resp.data or [])]


def _stored_id(resp: ApiResponse) -> Optional[str]:
    if isinstance(resp.data, Mapping):
        stored = resp.data.get("id")
    else:
        stored = resp.data

    return None if stored in (None, "") else str(stored)


class FormService(object):
    ''' Admin operations on form definitions. '''

    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self) -> List[FormDefinition]:
        resp = await self.client.get(URL_ADMIN_FORMS)
        return _parse_many(FormDefinition, resp, "form")

    async def fetch(self, form_id) -> FormDefinition:
        resp = await self.client.get(URL_ADMIN_FORM.format(form_id=form_id))
        return _parse_one(FormDefinition, resp, "form", form_id)

    async def create(self, form: FormDefinition) -> Optional[str]:
        resp = await self.client.post(URL_ADMIN_FORMS, form.payload())
        return _stored_id(resp)

    async def update(self, form_id, **changes) -> ApiResponse:
        return await self.client.patch(URL_ADMIN_FORM.format(form_id=form_id), changes)

    async def toggle_status(self, form_id) -> ApiResponse:
        return await self.client.patch(URL_ADMIN_FORM_STATUS.format(form_id=form_id))

    async def delete(self, form_id) -> ApiResponse:
        return await self.client.delete(URL_ADMIN_FORM.format(form_id=form_id))


class SubmissionService(object):
    ''' Admin operations on stored submissions. '''

    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self, form_id) -> List[SubmissionRecord]:
        resp = await self.client.get(URL_ADMIN_SUBMISSIONS, form_id=form_id)
        return _parse_many(SubmissionRecord, resp, "submission")

    async def fetch(self, submission_id) -> SubmissionRecord:
        resp = await self.client.get(URL_ADMIN_SUBMISSION.format(submission_id=submission_id))
        return _parse_one(SubmissionRecord, resp, "submission", submission_id)

    async def update(self, submission_id, **changes) -> ApiResponse:
        return await self.client.patch(URL_ADMIN_SUBMISSION.format(submission_id=submission_id), changes)

    async def delete(self, submission_id) -> ApiResponse:
        return await self.client.delete(URL_ADMIN_SUBMISSION.format(submission_id=submission_id))


class PublicFormService(object):
    ''' Operations available to the end user filling a published form. '''

    def __init__(self, client: ApiClient):
        self.client = client

    async def fetch(self, form_id) -> FormDefinition:
        resp = await self.client.get(URL_PUBLIC_FORM.format(form_id=form_id))
        return _parse_one(FormDefinition, resp, "form", form_id)

    async def submit(self, form_id, data: Dict[str, Any]) -> SubmissionRecord:
        record = SubmissionRecord(form_id=form_id, data=data)
        resp = await self.client.post(URL_PUBLIC_SUBMISSIONS, record.payload())

        if isinstance(resp.data, Mapping):
            return _parse(SubmissionRecord, {**record.model_dump(), **resp.data}, "submission")

        return record.set(id=_stored_id(resp))


class PersistenceBridge(object):
    """
    Pass-through between the builder and the storage API.

    Its only logic is shaping the outbound payload and reporting success or
    failure: no retries and no local caching.
    """

    def __init__(self, client: Optional[ApiClient] = None, **kwargs):
        self.client = client or ApiClient(**kwargs)
        self.forms = FormService(self.client)
        self.submissions = SubmissionService(self.client)
        self.public = PublicFormService(self.client)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        await self.client.close()

    async def save(self, form: FormDefinition) -> Optional[str]:
        if not form.id:
            stored_id = await self.forms.create(form)
            logger.info('Created form "%s" [%s]', form.name, stored_id)
            return stored_id

        await self.forms.update(form.id, **form.payload())
        logger.info('Updated form "%s" [%s]', form.name, form.id)
        return form.id

    async def load(self, form_id) -> FormDefinition:
        return await self.forms.fetch(form_id)

    async def toggle_status(self, form_id) -> ApiResponse:
        return await self.forms.toggle_status(form_id)

    async def delete(self, form_id) -> ApiResponse:
        return await self.forms.delete(form_id)

    async def submit(self, form_id, data: Dict[str, Any]) -> SubmissionRecord:
        return await self.public.submit(form_id, data)
