from ._meta import config, logger
from .setup import BRIDGE_STATE_KEY, app_bridge, create_app, setup_error_handler
from .views import configure_form_views

__all__ = [
    "config", "logger",
    "BRIDGE_STATE_KEY", "app_bridge", "create_app", "setup_error_handler",
    "configure_form_views",
]
