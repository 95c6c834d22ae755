from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from . import _types
from ._conditions import CallableCondition, Condition
from ._errors import (
    ClassNotFoundError,
    ConditionError,
    ConditionNotMetError,
    InvalidArgumentError,
    InvalidAssociationError,
    InvalidConditionResultError,
    ServiceNotFoundError,
)
from ._lifecycle import Lifecycle, LifecycleStore


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ._types import TypeId


@dataclass(frozen=True)
class ServiceEntry:
    name: str
    type_id: TypeId
    args: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ConditionCheck:
    """Outcome of evaluating a service's associated conditions in order.

    `failed_condition` names the first condition that did not return True,
    and `result` is what it returned instead.
    """

    service_name: str
    failed_condition: str | None = None
    result: object = True

    @property
    def ok(self) -> bool:
        return self.failed_condition is None

    def error(self) -> ConditionError | None:
        if self.failed_condition is None:
            return None
        if self.result is False:
            return ConditionNotMetError(self.failed_condition, self.service_name)
        return InvalidConditionResultError(self.failed_condition, self.service_name, self.result)


class ServiceFactory:
    """Build services by name once their conditions hold.

    - register services (a type identifier plus positional constructor args)
    - register named conditions and associate them with services
    - lifecycles: singleton / prototype (default)

    Type lookup and construction are delegated to `type_exists` and
    `construct`; by default a type identifier is a class or a dotted path.
    """

    def __init__(
        self,
        *,
        type_exists: Callable[[TypeId], bool] = _types.type_exists,
        construct: Callable[[TypeId, Sequence[Any]], object] = _types.construct,
    ) -> None:
        self._type_exists = type_exists
        self._construct = construct
        self._services: dict[str, ServiceEntry] = {}
        self._conditions: dict[str, Condition] = {}
        self._service_conditions: dict[str, list[str]] = {}
        self._service_types: dict[str, Lifecycle] = {}
        self._lifecycles = LifecycleStore()

    # Registration

    def register(
        self,
        service_name: str,
        type_id: TypeId,
        args: Sequence[Any] = (),
        lifecycle: Lifecycle | str = Lifecycle.PROTOTYPE,
    ) -> None:
        """Register a service recipe under a name.

        Example:
          factory.register("cache", RedisCache, ["localhost", 6379])
          factory.register("settings", "collections.OrderedDict", lifecycle="singleton")

        Re-registering a name replaces the previous recipe and its built singleton.
        """
        lifecycle = Lifecycle.coerce(lifecycle)

        if not self._type_exists(type_id):
            raise ClassNotFoundError(type_id)

        self._services[service_name] = ServiceEntry(name=service_name, type_id=type_id, args=tuple(args))
        self._lifecycles.forget(service_name)
        self._set_lifecycle(service_name, lifecycle)
        logger.debug("Registered service '%s' -> %r (%s)", service_name, type_id, lifecycle.value)

    def register_condition(self, condition_name: str, condition: Condition | Callable[[], bool]) -> None:
        """Register a condition, wrapping a bare callable in a `CallableCondition`."""
        if not isinstance(condition, Condition):
            if not callable(condition):
                msg = f"Condition '{condition_name}' must be a Condition or a callable, got {type(condition).__name__}"
                raise InvalidArgumentError(msg)
            condition = CallableCondition(condition_name, condition)

        self._conditions[condition_name] = condition
        logger.debug("Registered condition '%s'", condition_name)

    def associate_condition(self, service_name: str, condition_name: str) -> None:
        """Append a condition to the ordered list a service must satisfy."""
        if service_name not in self._services:
            raise ServiceNotFoundError(service_name)

        if condition_name not in self._conditions:
            raise InvalidAssociationError(service_name, condition_name)

        self._service_conditions.setdefault(service_name, []).append(condition_name)
        logger.debug("Associated condition '%s' with service '%s'", condition_name, service_name)

    def get_condition(self, condition_name: str) -> Condition | None:
        return self._conditions.get(condition_name)

    def get_conditions(self, service_name: str) -> tuple[str, ...]:
        return tuple(self._service_conditions.get(service_name, ()))

    # Resolution

    def check_conditions(self, service_name: str) -> ConditionCheck:
        """Evaluate the service's conditions in association order.

        Stops at the first condition that does not return True. Exceptions
        raised by a condition propagate unchanged.
        """
        for condition_name in self._service_conditions.get(service_name, ()):
            result = self._conditions[condition_name].evaluate()
            if result is not True:
                logger.debug(
                    "Condition '%s' returned %r for service '%s'", condition_name, result, service_name
                )
                return ConditionCheck(service_name, condition_name, result)

        return ConditionCheck(service_name)

    def create(self, service_name: str) -> object:
        """Return an instance of the service once all its conditions hold.

        Conditions are evaluated on every call, singletons are only built once.
        """
        entry = self._services.get(service_name)
        if entry is None:
            raise ServiceNotFoundError(service_name)

        error = self.check_conditions(service_name).error()
        if error is not None:
            raise error

        return self._lifecycles.get_instance_or_build(
            service_name,
            lambda: self._construct(entry.type_id, entry.args),
        )

    def has(self, service_name: str) -> bool:
        """True if the service is registered and all its conditions hold."""
        if service_name not in self._services:
            return False

        return self.check_conditions(service_name).ok

    # Lifecycle

    def register_as_singleton(self, service_name: str) -> None:
        self._set_lifecycle(service_name, Lifecycle.SINGLETON)

    def register_as_prototype(self, service_name: str) -> None:
        self._set_lifecycle(service_name, Lifecycle.PROTOTYPE)

    def change_service_type(self, service_name: str, service_type: Lifecycle | str) -> None:
        self._set_lifecycle(service_name, Lifecycle.coerce(service_type))

    def get_service_type(self, service_name: str) -> Lifecycle:
        return self._service_types.get(service_name, Lifecycle.PROTOTYPE)

    def is_singleton(self, service_name: str) -> bool:
        return self._lifecycles.is_singleton(service_name)

    def is_prototype(self, service_name: str) -> bool:
        return self._lifecycles.is_prototype(service_name)

    def clear_singletons(self) -> None:
        """Discard all singleton entries; the affected services become prototypes."""
        self._lifecycles.clear_singletons()
        for service_name, lifecycle in self._service_types.items():
            if lifecycle is Lifecycle.SINGLETON:
                self._service_types[service_name] = Lifecycle.PROTOTYPE
        logger.debug("Cleared singletons")

    def _set_lifecycle(self, service_name: str, lifecycle: Lifecycle) -> None:
        if lifecycle is Lifecycle.SINGLETON:
            self._lifecycles.register_as_singleton(service_name)
        else:
            self._lifecycles.register_as_prototype(service_name)
        self._service_types[service_name] = lifecycle
