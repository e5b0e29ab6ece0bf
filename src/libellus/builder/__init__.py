from ._meta import config, logger
from .model import ElementInstance, FormDefinition, SubmissionRecord
from .canvas import BuilderCanvas
from .editor import PropertyEditor
from .session import FormBuilder

__all__ = [
    "config", "logger",
    "ElementInstance", "FormDefinition", "SubmissionRecord",
    "BuilderCanvas", "PropertyEditor", "FormBuilder",
]
