import json
import uuid
from datetime import date, datetime
from enum import Enum
from json.encoder import JSONEncoder
from types import SimpleNamespace

from pydantic import BaseModel

from ._meta import config

DATE_FORMAT = config.DATE_FORMAT
DATETIME_FORMAT = config.DATETIME_FORMAT


class LibellusJSONEncoder(JSONEncoder):
    ''' Sample usage:

        json.dumps(form, cls=LibellusJSONEncoder)
    '''

    def default(self, obj):
        if isinstance(obj, uuid.UUID):
            return str(obj)

        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")

        if isinstance(obj, SimpleNamespace):
            return obj.__dict__

        if isinstance(obj, datetime):
            return obj.strftime(DATETIME_FORMAT)

        if isinstance(obj, date):
            return obj.strftime(DATE_FORMAT)

        if isinstance(obj, (set, tuple)):
            return list(obj)

        if isinstance(obj, Enum):
            return obj.value

        return super().default(obj)


def serialize_json(obj, **kwargs):
    return json.dumps(obj, cls=LibellusJSONEncoder, **kwargs)
