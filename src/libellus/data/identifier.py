import base64
import secrets
import uuid

from ._meta import config

ELEMENT_ID_BYTES = config.ELEMENT_ID_BYTES


def _gen_base64():
    ''' Short, url-safe random identifier (no padding). '''
    return base64.urlsafe_b64encode(secrets.token_bytes(ELEMENT_ID_BYTES)).rstrip(b'=').decode('ascii')


UUID_GENR = uuid.uuid4          # Generate a random UUID
ELEMENT_ID_GENR = _gen_base64   # Generate a random element instance identifier
