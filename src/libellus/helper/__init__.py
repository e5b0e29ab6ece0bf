from .genutil import camel_to_lower, camel_to_title
from .timeutil import timestamp
from .registry import ClassRegistry
