import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

import libellus
from libellus.element import ElementRegistry
from libellus.error import LibellusException

from ._meta import config, logger

BRIDGE_STATE_KEY = "libellus_bridge"


def attach_bridge(app: FastAPI, bridge):
    setattr(app.state, BRIDGE_STATE_KEY, bridge)
    return bridge


def app_bridge(app: FastAPI):
    return getattr(app.state, BRIDGE_STATE_KEY, None)


@asynccontextmanager
async def form_lifespan(app: FastAPI):
    bridge = app_bridge(app)
    logger.info("Form application [%s] started. Storage: %s",
                app.title, bridge.client.base_url if bridge else None)

    yield

    bridge = app_bridge(app)
    if bridge is not None:
        await bridge.close()
        logger.info("Storage bridge of [%s] closed.", app.title)


def create_app(bridge=None, config=config, **kwargs) -> FastAPI:
    """
    Build the public form application.

    The storage bridge (if given) lives on `app.state` and is closed when
    the application shuts down. Views are added by `configure_form_views`.
    """
    cfg = dict(
        title=config.APPLICATION_NAME,
        version=config.APPLICATION_VERSION,
        description=config.APPLICATION_DESC,
        root_path=config.APPLICATION_ROOT
    )
    cfg.update(kwargs)
    app = FastAPI(lifespan=form_lifespan, **cfg)

    if bridge is not None:
        attach_bridge(app, bridge)

    @app.get("/_meta", tags=["Metadata"])
    async def application_metadata(request: Request):
        ''' Form application info: versions, element palette and storage endpoint '''
        bridge = app_bridge(request.app)
        return {
            "name": config.APPLICATION_NAME,
            "version": config.APPLICATION_VERSION,
            "framework": libellus.__version__,
            "build_time": config.APPLICATION_BUILD_TIME,
            "element_types": list(ElementRegistry.keys()),
            "storage": bridge.client.base_url if bridge else None,
        }

    return setup_error_handler(app)


def setup_error_handler(app: FastAPI) -> FastAPI:
    DEVELOPER_MODE = config.DEVELOPER_MODE

    @app.exception_handler(LibellusException)
    async def libellus_exception_handler(request: Request, exc: LibellusException):
        content = {"success": False, **exc.content}

        if DEVELOPER_MODE:
            content['traceback'] = traceback.format_exc()

        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)

        return JSONResponse(
            status_code=exc.status_code,
            content=content
        )

    @app.exception_handler(ValidationError)
    async def validation_error_exception_handler(request: Request, exc: ValidationError):
        content = {
            "success": False,
            "errcode": "A422.01",
            "details": exc.errors(include_url=False, include_context=False),
            "message": str(exc),
        }

        if DEVELOPER_MODE:
            content['traceback'] = traceback.format_exc()

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=content
        )

    return app
