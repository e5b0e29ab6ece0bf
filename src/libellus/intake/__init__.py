from ._meta import config, logger
from .intake import SubmissionIntake, is_blank

__all__ = ["config", "logger", "SubmissionIntake", "is_blank"]
