from ._meta import config, logger
from .client import ApiClient, ApiResponse, token_from_cookies
from .service import (
    FormService,
    PersistenceBridge,
    PublicFormService,
    SubmissionService,
)

__all__ = [
    "config", "logger",
    "ApiClient", "ApiResponse", "token_from_cookies",
    "FormService", "SubmissionService", "PublicFormService",
    "PersistenceBridge",
]
