"""Default type lookup and construction used by `ServiceFactory`.

A type identifier is either a class object or a dotted import path,
e.g. "collections.OrderedDict" or "collections:OrderedDict".
"""

from __future__ import annotations

import importlib
import inspect
import logging
from typing import TYPE_CHECKING, Any


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence

TypeId = type | str


def resolve_type(type_id: TypeId) -> type | None:
    if inspect.isclass(type_id):
        return type_id

    if not isinstance(type_id, str) or not type_id:
        return None

    if ":" in type_id:
        module_name, _, qualname = type_id.partition(":")
    else:
        module_name, _, qualname = type_id.rpartition(".")

    if not module_name or not qualname:
        return None

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        logger.debug("Cannot import '%s' for type '%s' (%s)", module_name, type_id, exc)
        return None

    for part in qualname.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            return None

    return obj if inspect.isclass(obj) else None


def type_exists(type_id: TypeId) -> bool:
    return resolve_type(type_id) is not None


def construct(type_id: TypeId, args: Sequence[Any]) -> object:
    cls = resolve_type(type_id)
    if cls is None:
        msg = f"Cannot construct unknown type {type_id!r}"
        raise TypeError(msg)
    return cls(*args)
