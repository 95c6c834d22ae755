"""Conditional service factory.

This package provides a small service factory for Python: services are
registered by name with a type and constructor arguments, gated by composable
boolean conditions, and built with a singleton or prototype lifecycle.

Exports:
- `ServiceFactory`: Registers services and conditions, creates services whose
  conditions hold.
- `Lifecycle`: Enum for service lifecycles (singleton or prototype).
- `Condition` and its variants (`CallableCondition`, `AndCondition`,
  `OrCondition`, `NotCondition`, `XorCondition`, `NorCondition`,
  `CachedCondition`): composable named predicates.
- Errors raised by the factory, all deriving from `FactoryError`.
"""

from ._conditions import (
    AndCondition,
    CachedCondition,
    CallableCondition,
    Condition,
    NorCondition,
    NotCondition,
    OrCondition,
    XorCondition,
)
from ._container import ConditionCheck, ServiceEntry, ServiceFactory
from ._errors import (
    ClassNotFoundError,
    ConditionError,
    ConditionNotMetError,
    FactoryError,
    InvalidArgumentError,
    InvalidAssociationError,
    InvalidConditionResultError,
    ServiceNotFoundError,
)
from ._lifecycle import Lifecycle, LifecycleStore


__all__ = [
    "AndCondition",
    "CachedCondition",
    "CallableCondition",
    "ClassNotFoundError",
    "Condition",
    "ConditionCheck",
    "ConditionError",
    "ConditionNotMetError",
    "FactoryError",
    "InvalidArgumentError",
    "InvalidAssociationError",
    "InvalidConditionResultError",
    "Lifecycle",
    "LifecycleStore",
    "NorCondition",
    "NotCondition",
    "OrCondition",
    "ServiceEntry",
    "ServiceFactory",
    "ServiceNotFoundError",
    "XorCondition",
]
