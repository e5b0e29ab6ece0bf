from typing import Any, Optional

import httpx

from libellus.data import DataModel
from libellus.error import (
    ForbiddenError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
)

from ._meta import config, logger

DEBUG_BRIDGE = config.DEBUG_BRIDGE
SUCCESS_CODES = [200, 201, 202, 203, 204, 205, 206, 207, 208, 226]


class ApiResponse(DataModel):
    ''' Envelope of every storage answer: `{success, message?, data?}` '''
    success: Optional[bool] = None
    message: Optional[str] = None
    data: Any = None


def token_from_cookies(cookies, cookie_name=None):
    if not cookies:
        return None

    return cookies.get(cookie_name or config.SESSION_TOKEN_COOKIE) or None


class ApiClient(object):
    """
    Thin async client of the form-storage REST API.

    Every request carries JSON bodies and, when a token is known, a bearer
    Authorization header. Transport failures and refused operations surface as
    `StorageError`; a 404 as `NotFoundError`; a 401 as `UnauthorizedError`.
    """

    def __init__(self, base_url=None, token=None, cookies=None, timeout=None, transport=None):
        self.base_url = base_url or config.API_BASE_URL
        self.token = token if token else token_from_cookies(cookies)
        self.timeout = config.REQUEST_TIMEOUT if timeout is None else timeout
        self._transport = transport
        self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def auth_header(self):
        if not self.token:
            return {}

        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method, endpoint, data=None, **params) -> ApiResponse:
        try:
            resp = await self.client.request(
                method,
                endpoint,
                json=data,
                params=params or None,
                headers=self.auth_header(),
            )
        except httpx.HTTPError as e:
            logger.warning("/storage/ %s %s failed: %s", method, endpoint, e)
            raise StorageError(
                "S00.501",
                "Unable to reach the form storage. Please try again.",
                {"method": method, "endpoint": endpoint}
            ) from e

        DEBUG_BRIDGE and logger.debug("/storage/ %s %s -> [%s]", method, endpoint, resp.status_code)
        return self._handle_response(method, endpoint, resp)

    def _handle_response(self, method, endpoint, resp) -> ApiResponse:
        # e.g. 204 No Content on DELETE
        if resp.status_code in SUCCESS_CODES and not resp.content.strip():
            return ApiResponse(success=True)

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if resp.status_code == 404:
                raise NotFoundError("S00.404", f"Resource not found: {endpoint}")

            logger.warning("/storage/ %s %s: unexpected body [%s]", method, endpoint, resp.status_code)
            raise StorageError(
                "S00.502",
                f"Unexpected response from form storage [{resp.status_code}]",
                {"method": method, "endpoint": endpoint}
            )

        result = ApiResponse.create(body)
        if resp.status_code in SUCCESS_CODES and result.success is not False:
            return result

        message = result.message or resp.reason_phrase or "Form storage refused the request"
        logger.info("/storage/ %s %s: [%s] -> %s", method, endpoint, resp.status_code, message)

        if resp.status_code == 404:
            raise NotFoundError("S00.404", message)

        if resp.status_code == 401:
            raise UnauthorizedError("S00.401", message)

        if resp.status_code == 403:
            raise ForbiddenError("S00.403", message)

        raise StorageError("S00.503", message, {"status": resp.status_code})

    async def get(self, endpoint, **params):
        return await self._request("GET", endpoint, **params)

    async def post(self, endpoint, data, **params):
        return await self._request("POST", endpoint, data, **params)

    async def patch(self, endpoint, data=None, **params):
        return await self._request("PATCH", endpoint, data, **params)

    async def delete(self, endpoint, **params):
        return await self._request("DELETE", endpoint, **params)
