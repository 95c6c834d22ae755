from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ._errors import InvalidArgumentError


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable


class Lifecycle(str, Enum):
    SINGLETON = "singleton"
    PROTOTYPE = "prototype"

    @classmethod
    def coerce(cls, value: Lifecycle | str) -> Lifecycle:
        """Accept a member or its string value, reject anything else."""
        try:
            return cls(value)
        except ValueError:
            msg = f"Invalid service type: {value}"
            raise InvalidArgumentError(msg) from None


@dataclass
class SingletonSlot:
    instance: object | None = None
    built: bool = False  # a built instance may itself be None


class LifecycleStore:
    """Per-service singleton/prototype state.

    A service is a singleton iff it has a slot. A slot is either reserved
    (not built yet) or holds the instance built by the first successful
    `get_instance_or_build` call.
    """

    def __init__(self) -> None:
        self._singletons: dict[str, SingletonSlot] = {}

    def is_singleton(self, service_name: str) -> bool:
        return service_name in self._singletons

    def is_prototype(self, service_name: str) -> bool:
        return service_name not in self._singletons

    def lifecycle_of(self, service_name: str) -> Lifecycle:
        return Lifecycle.SINGLETON if self.is_singleton(service_name) else Lifecycle.PROTOTYPE

    def register_as_singleton(self, service_name: str) -> None:
        # Never replaces an existing slot, built or not.
        if service_name not in self._singletons:
            self._singletons[service_name] = SingletonSlot()
            logger.debug("Service '%s' is now a singleton", service_name)

    def register_as_prototype(self, service_name: str) -> None:
        if self._singletons.pop(service_name, None) is not None:
            logger.debug("Service '%s' is now a prototype", service_name)

    def is_built(self, service_name: str) -> bool:
        slot = self._singletons.get(service_name)
        return slot is not None and slot.built

    def get_instance_or_build(self, service_name: str, build: Callable[[], object]) -> object:
        """Return the singleton instance, building it on first use.

        Prototypes are built on every call and never stored.
        """
        slot = self._singletons.get(service_name)
        if slot is None:
            return build()

        if not slot.built:
            slot.instance = build()
            slot.built = True
            logger.debug("Materialized singleton '%s'", service_name)

        return slot.instance

    def clear_singletons(self) -> None:
        """Discard every singleton slot, built or reserved."""
        self._singletons.clear()

    def forget(self, service_name: str) -> None:
        self._singletons.pop(service_name, None)
