from ._meta import config, logger
from .identifier import UUID_GENR, ELEMENT_ID_GENR
from .model import DataModel
from .serializer import LibellusJSONEncoder as JSONEncoder, serialize_json


__all__ = (
    "config",
    "logger",
    "DataModel",
    "ELEMENT_ID_GENR",
    "JSONEncoder",
    "serialize_json",
    "UUID_GENR",
)
