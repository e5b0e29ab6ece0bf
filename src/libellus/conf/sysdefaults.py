''' Last-chance values for configuration variables.

    A variable that is neither set in the configuration file (in the package's
    section) nor in the package's `_meta/defaults.py` falls back to this module.
'''

LOG_LEVEL = "info"
LOG_FORMATTER_LONG = (
    "[%(asctime)-15s] [{hostname}] "
    "%(process)3d %(levelname)-6s "
    "[%(name)16.16s - %(filename)16.16s:%(lineno)-4d] "
    "%(message)s"
)
LOG_FORMATTER_SHORT = (
    "[%(asctime)-8s] "
    "[%(name)16.16s - %(filename)16.16s:%(lineno)-4d]%(levelname)6s "
    "%(message)s"
)
LOG_DATEFMT = "%H:%M:%S"
LOG_FORMATTER = LOG_FORMATTER_SHORT
LOG_OUTPUT = None
LOG_COLORED = False

# Log every raised LibellusException with its traceback
DEBUG_APP_EXCEPTION = False

# Dump the resolved configuration of a package. E.g. "libellus.bridge" or "#ALL"
DEBUG_MODULE_CONFIG = None
