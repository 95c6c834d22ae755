from __future__ import annotations

from typing import Any


class FactoryError(Exception):
    """Base class for every error raised by the service factory."""


class ServiceNotFoundError(FactoryError, LookupError):
    def __init__(self, service_name: str) -> None:
        self.service_name = service_name
        super().__init__(f"Service not found: {service_name}")


class ClassNotFoundError(FactoryError, LookupError):
    def __init__(self, type_id: Any) -> None:
        self.type_id = type_id
        super().__init__(f"Class not found: {type_id!r}")


class InvalidAssociationError(FactoryError, ValueError):
    def __init__(self, service_name: str, condition_name: str) -> None:
        self.service_name = service_name
        self.condition_name = condition_name
        super().__init__(f"Condition not found: {condition_name}")


class InvalidArgumentError(FactoryError, ValueError):
    pass


class ConditionError(FactoryError, RuntimeError):
    """A service's conditions did not allow it to be built.

    `has()` turns these into `False`; `create()` raises them.
    """

    def __init__(self, message: str, *, condition_name: str, service_name: str) -> None:
        self.condition_name = condition_name
        self.service_name = service_name
        super().__init__(message)


class ConditionNotMetError(ConditionError):
    def __init__(self, condition_name: str, service_name: str) -> None:
        msg = f"Condition '{condition_name}' not met for service: {service_name}"
        super().__init__(msg, condition_name=condition_name, service_name=service_name)


class InvalidConditionResultError(ConditionError):
    def __init__(self, condition_name: str, service_name: str, result: object) -> None:
        self.result = result
        msg = f"Invalid result for condition '{condition_name}' on service: {service_name}"
        super().__init__(msg, condition_name=condition_name, service_name=service_name)
