''' Per-package loggers with a configurable level, output and formatter.
'''
import logging
import platform
import sys
from typing import Any, List, Optional

from libellus.conf import ModuleConfig, getConfig


class NoConfigValue(Exception):
    pass


def getLoggerHandler(logspec: Optional[str] = None):
    if logspec is None or logspec == "stderr":
        return logging.StreamHandler(sys.stderr)

    if logspec == "stdout":
        return logging.StreamHandler(sys.stdout)

    if logspec.startswith("file://"):
        return logging.FileHandler(logspec[7:])

    raise ValueError("Cannot parse logging spec: %s" % logspec)


def __closure__():  # noqa: C901
    LIBELLUS_LOGGERS = dict()

    def setupLogger(module_name: str, log_config: ModuleConfig):
        module_logger = logging.getLogger(module_name)

        if log_config is None:
            return module_logger

        def get_config_value(name):
            value = log_config.get(name)
            if isinstance(value, str):
                return value

            raise NoConfigValue("Invalid log config value: {} = {}".format(name, value))

        log_level = logging.NOTSET
        try:
            log_level = getattr(logging, get_config_value("LOG_LEVEL").upper())
        except (NoConfigValue, AttributeError):
            pass

        module_logger.setLevel(log_level)

        log_output = log_config.get("LOG_OUTPUT")
        if not isinstance(log_output, (list, tuple)):
            log_output = (log_output, )

        log_handlers: List[Any] = [getLoggerHandler(output) for output in log_output if output]

        try:
            log_formatter = get_config_value("LOG_FORMATTER")
            log_datefmt = get_config_value("LOG_DATEFMT")
        except NoConfigValue:
            pass
        else:
            hostname = platform.node().split(".")[0]
            formatter = log_formatter.format(hostname=hostname)

            for handler in log_handlers:
                handler.setFormatter(logging.Formatter(formatter, log_datefmt))

            if log_config.get("LOG_COLORED"):
                import coloredlogs
                coloredlogs.install(fmt=formatter, level=log_level, logger=module_logger)

        for handler in log_handlers:
            module_logger.addHandler(handler)

        LIBELLUS_LOGGERS[module_name] = module_logger
        return module_logger

    def getLogger(module_name, log_config=None):
        if module_name in LIBELLUS_LOGGERS:
            return LIBELLUS_LOGGERS[module_name]

        log_config = log_config or getConfig(module_name)
        return setupLogger(module_name, log_config)

    return getLogger


getLogger = __closure__()
