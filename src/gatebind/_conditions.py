from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class Condition(ABC):
    """A named boolean precondition.

    Conditions compose with operators:
      a & b  -> AndCondition([a, b])
      a | b  -> OrCondition([a, b])
      a ^ b  -> XorCondition([a, b])
      ~a     -> NotCondition(a)
    """

    _name: str

    @property
    def name(self) -> str:
        return self._name

    def get_name(self) -> str:
        return self._name

    @abstractmethod
    def evaluate(self) -> bool: ...

    def __and__(self, other: object) -> Condition:
        if not isinstance(other, Condition):
            return NotImplemented
        return AndCondition([self, other])

    def __or__(self, other: object) -> Condition:
        if not isinstance(other, Condition):
            return NotImplemented
        return OrCondition([self, other])

    def __xor__(self, other: object) -> Condition:
        if not isinstance(other, Condition):
            return NotImplemented
        return XorCondition([self, other])

    def __invert__(self) -> Condition:
        return NotCondition(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"


class CallableCondition(Condition):
    """Leaf condition backed by a zero-argument predicate.

    The predicate result is returned verbatim and its exceptions propagate.
    """

    def __init__(self, name: str, predicate: Callable[[], bool]) -> None:
        self._name = name
        self._predicate = predicate

    def evaluate(self) -> bool:
        return self._predicate()


class _CompositeCondition(Condition):
    operator: str

    def __init__(self, conditions: Iterable[Condition]) -> None:
        self._conditions: tuple[Condition, ...] = tuple(conditions)
        # "and_" for no children
        self._name = f"{self.operator}_" + "_".join(c.name for c in self._conditions)

    @property
    def conditions(self) -> tuple[Condition, ...]:
        return self._conditions


class AndCondition(_CompositeCondition):
    """True iff every child is true. Stops at the first false child."""

    operator = "and"

    def evaluate(self) -> bool:
        for condition in self._conditions:
            if not condition.evaluate():
                return False
        return True


class OrCondition(_CompositeCondition):
    """True on the first true child. False for no children."""

    operator = "or"

    def evaluate(self) -> bool:
        for condition in self._conditions:
            if condition.evaluate():
                return True
        return False


class NorCondition(_CompositeCondition):
    """True iff no child is true. Stops at the first true child."""

    operator = "nor"

    def evaluate(self) -> bool:
        for condition in self._conditions:
            if condition.evaluate():
                return False
        return True


class XorCondition(_CompositeCondition):
    """True iff exactly one child is true.

    Every child is evaluated, the result depends on the total count.
    """

    operator = "xor"

    def evaluate(self) -> bool:
        true_count = 0
        for condition in self._conditions:
            if condition.evaluate():
                true_count += 1
        return true_count == 1


class NotCondition(_CompositeCondition):
    operator = "not"

    def __init__(self, condition: Condition) -> None:
        super().__init__([condition])

    @property
    def condition(self) -> Condition:
        return self._conditions[0]

    def evaluate(self) -> bool:
        return not self._conditions[0].evaluate()


class CachedCondition(Condition):
    """Memoize another condition's result for `ttl` seconds.

    A cached result is valid while `clock() - cached_at < ttl`. `clock` defaults
    to `time.monotonic`; tests may pass any callable returning seconds.
    """

    def __init__(
        self,
        condition: Condition,
        ttl: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl < 0:
            msg = f"ttl must be non-negative, got {ttl!r}"
            raise ValueError(msg)

        self._name = f"cached_{condition.name}"
        self._condition = condition
        self._ttl = ttl
        self._clock = clock
        # (result, cached_at), always set and cleared together
        self._memo: tuple[bool, float] | None = None

    @property
    def condition(self) -> Condition:
        return self._condition

    @property
    def ttl(self) -> float:
        return self._ttl

    def evaluate(self) -> bool:
        now = self._clock()

        if self._memo is not None:
            result, cached_at = self._memo
            if now - cached_at < self._ttl:
                return result

        result = self._condition.evaluate()
        self._memo = (result, now)
        logger.debug("Refreshed cached condition '%s' -> %r", self._name, result)
        return result

    def clear_cache(self) -> None:
        self._memo = None
