import re

RX_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')


def camel_to_lower(name, sep='-'):
    ''' TextField -> text-field, HTTPClient -> http-client '''
    return RX_CAMEL_BOUNDARY.sub(sep, name).lower()


def camel_to_title(name):
    ''' TextField -> Text Field '''
    return RX_CAMEL_BOUNDARY.sub(' ', name)

