from pyrsistent import pmap

from libellus import logger
from libellus.error import BadRequestError, NotFoundError
from .genutil import camel_to_lower


class BaseClassRegistry(object):
    pass


def ClassRegistry(base_class, post_register=None):  # noqa: C901
    ''' The register function covers 3 cases:
        - empty decorator. E.g. @register
        - decorator without explicit key. E.g. @register(icon='text')
        - decorator with key provided. E.g. @register('TextField')
    '''

    lookup_table = dict()
    registry_name = base_class.__name__

    def _register(key=None, **kwargs):
        def _decorator(cls):
            _key = camel_to_lower(cls.__name__) if key is None else key
            exist_key = cls.__dict__.get('__clsid__')

            if exist_key is not None and exist_key != _key:
                raise BadRequestError(
                    "H00.301",
                    f"Register a class with a different key is not allowed [__clsid__ = {exist_key}] != [{_key}]",
                    None
                )

            if _key in lookup_table:
                raise BadRequestError(
                    "H00.302",
                    f"Key [{_key}] already registered in registry [{registry_name}]",
                    None
                )

            if not issubclass(cls, base_class):
                raise BadRequestError(
                    "H00.303",
                    f"Registering class [{cls.__name__}] must be a subclass of [{registry_name}]",
                    None
                )

            cls.__clsid__ = _key
            lookup_table[_key] = cls

            logger.debug('Registered %s [%s => %s]', registry_name, _key, cls.__name__)

            if post_register is None:
                return cls

            if modified_cls := post_register(cls, _key, **kwargs):
                lookup_table[_key] = modified_cls
                return modified_cls

            return cls

        if isinstance(key, type):
            cls, key = key, None
            return _decorator(cls)

        return _decorator

    def _get_item(key):
        try:
            return lookup_table[key]
        except (KeyError, TypeError):
            pass

        raise NotFoundError(
            "H00.401",
            f"Registry item [{key}] not found in registry [{registry_name}]"
        )

    def _contains(key):
        try:
            return key in lookup_table
        except TypeError:
            return False

    def _items():
        return tuple(lookup_table.items())

    def _keys():
        return tuple(lookup_table.keys())

    def _values():
        return tuple(lookup_table.values())

    def _get_registry():
        return pmap(lookup_table)

    def _construct(key, *args, **kwargs) -> base_class:
        return _get_item(key)(*args, **kwargs)

    return type(f"{registry_name}Registry", (BaseClassRegistry,), dict(
        base_class=base_class,
        construct=staticmethod(_construct),
        contains=staticmethod(_contains),
        get=staticmethod(_get_item),
        get_registry=staticmethod(_get_registry),
        register=staticmethod(_register),
        keys=staticmethod(_keys),
        values=staticmethod(_values),
        items=staticmethod(_items),
    ))
