import configparser
import json
import logging
import os
import re

from types import ModuleType
from typing import Any, Callable, Dict, Union

from . import sysdefaults


def env(name: str, defval: Any, coercer: Callable[[Any], Any] = None):
    ''' Extract an environment value to use as a configuration variable
    '''
    value = os.environ.get(name, defval)
    return coercer(value) if callable(coercer) and value is not None else value


LIBELLUS_CONFIG_FILES = env("LIBELLUS_CONFIG_FILE", "base.ini|config.ini").split('|')
DEBUG_ALL_CONFIG_VALUE = "#ALL"


def __module_config__():  # noqa: C901
    RX_INVALID_OPTION = re.compile(r"[^A-Za-z\d_]+")

    __parser__ = configparser.ConfigParser()
    __parser__.optionxform = lambda s: RX_INVALID_OPTION.sub("_", s.strip()).upper()

    __config__: Dict[str, "ModuleConfig"] = {}

    def getter(section, key, value):
        # NOTE: bool is a subclass of int, it must be checked first.
        if isinstance(value, bool):
            return __parser__.getboolean(section, key)
        if isinstance(value, int):
            return __parser__.getint(section, key)
        if isinstance(value, float):
            return __parser__.getfloat(section, key)
        if isinstance(value, (dict, list, tuple)):
            return json.loads(__parser__.get(section, key))
        if isinstance(value, (str, type(None))):
            return __parser__.get(section, key)

        raise ValueError(f"Not supported config value type [{type(value)}].")

    class ModuleConfig(object):
        def __init__(self, module_name: str, *defaults):
            if module_name in __config__:
                raise RuntimeError(f"Module [{module_name}] already configured.")

            if not __parser__.has_section(module_name):
                __parser__.add_section(module_name)

            self.__name__ = module_name
            values: Dict[str, Any] = {}
            sources: Dict[str, Any] = {}

            for conf in defaults + (sysdefaults,):
                if conf is None:
                    continue

                items = conf.items() if isinstance(conf, ModuleConfig) else vars(conf).items()
                for key, defval in items:
                    if not key.isupper() or key in values:
                        continue

                    try:
                        values[key] = getter(module_name, key, defval)
                        sources[key] = LIBELLUS_CONFIG_FILES
                    except configparser.NoOptionError:
                        values[key] = defval
                        sources[key] = getattr(conf, '__name__', '<unknown>')

            if sysdefaults.DEBUG_MODULE_CONFIG in (DEBUG_ALL_CONFIG_VALUE, module_name):
                logging.debug("=== START MODULE CONFIG [%s] ===", module_name)
                for key, value in values.items():
                    logging.debug(" - [%s] %s ::= %s", key, value, sources[key])
                logging.debug("=/=  END MODULE CONFIG [%s]  =/=", module_name)

            self.__values__ = values

        def __getattr__(self, name):
            try:
                return self.__values__[name]
            except KeyError:
                raise AttributeError(f"Config [{self.__name__}] has no value [{name}]") from None

        def __getitem__(self, name):
            return self.__values__[name]

        def get(self, name, default=None):
            return self.__values__.get(name, default)

        def items(self):
            ''' Only UPPERCASE keys declared in the defaults are listed. '''
            yield from self.__values__.items()

        def keys(self):
            yield from self.__values__.keys()

        def as_dict(self):
            return self.__values__.copy()

    def get_config(config_key: str, *defaults: Union[ModuleType, ModuleConfig]) -> ModuleConfig:
        if config_key not in __config__:
            __config__[config_key] = ModuleConfig(config_key, *defaults)

        return __config__[config_key]

    # Missing files are ignored, see `ConfigParser.read`
    __parser__.read(LIBELLUS_CONFIG_FILES)
    return ModuleConfig, get_config, __config__.items


ModuleConfig, getConfig, list_config = __module_config__()
