from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import (
    Any,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from bninfer.errors import EmptyDomainError, InconsistentEvidenceError, UndefinedProbabilityError

DEFAULT_DECIMALS = 3
BOOLEAN_DOMAIN: Tuple[bool, bool] = (True, False)


def round_half_up(value: float, places: int) -> float:
    """
    Round ``value`` to ``places`` decimals, halves away from zero.

    The exact binary value of the float is rounded, so 0.0005 (stored as
    slightly less than a half) rounds down exactly as a decimal type would.
    """
    quantum = Decimal(1).scaleb(-int(places))
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True, eq=False)
class RandomVariable:
    """
    A named discrete variable with a finite ordered domain.

    Identity is the name alone: two variables with the same name compare
    equal and hash alike regardless of their domains.
    """

    name: str
    domain: Tuple[Hashable, ...]

    def __init__(self, name: str, domain: Sequence[Hashable]) -> None:
        name = str(name).strip()
        if not name:
            raise ValueError("Variable name cannot be empty")
        values = tuple(domain)
        if not values:
            raise EmptyDomainError(f"Variable {name!r} must have at least one domain value")
        if len(set(values)) != len(values):
            raise ValueError(f"Variable {name!r} has duplicate domain values")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "domain", values)

    @classmethod
    def boolean(cls, name: str) -> "RandomVariable":
        return cls(name, BOOLEAN_DOMAIN)

    @property
    def is_boolean(self) -> bool:
        return set(self.domain) == set(BOOLEAN_DOMAIN)

    def index_of(self, value: Hashable) -> int:
        try:
            return self.domain.index(value)
        except ValueError as exc:
            raise InconsistentEvidenceError(
                f"Value {value!r} is not in the domain of {self.name!r}"
            ) from exc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RandomVariable):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"RandomVariable({self.name!r}, {list(self.domain)!r})"


VariableKey = Union[RandomVariable, str]


def _name_of(key: VariableKey) -> str:
    if isinstance(key, RandomVariable):
        return key.name
    return str(key)


class Assignment(MutableMapping):
    """
    Partial mapping from random variables to one value each.

    Entries are keyed by variable name, so setting a variable that is already
    present overwrites its value instead of adding a second entry. Lookups
    accept either the variable or its name; iteration yields names.
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[RandomVariable, Any]]] = None) -> None:
        self._entries: Dict[str, Tuple[RandomVariable, Any]] = {}
        if pairs is not None:
            for variable, value in pairs:
                self.set(variable, value)

    @classmethod
    def from_mapping(
        cls, values: Union[Mapping[RandomVariable, Any], Iterable[Tuple[RandomVariable, Any]]]
    ) -> "Assignment":
        if isinstance(values, Mapping):
            return cls(values.items())
        return cls(values)

    def set(self, variable: RandomVariable, value: Any) -> None:
        """Set or overwrite the value of ``variable``."""
        if not isinstance(variable, RandomVariable):
            raise TypeError(f"Expected a RandomVariable, got {type(variable).__name__}")
        self._entries[variable.name] = (variable, value)

    def variable(self, key: VariableKey) -> RandomVariable:
        return self._entries[_name_of(key)][0]

    def variables(self) -> Iterator[RandomVariable]:
        for variable, _ in self._entries.values():
            yield variable

    def copy(self) -> "Assignment":
        """Shallow copy: new entries, shared variable and value objects."""
        out = Assignment()
        out._entries = dict(self._entries)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {name: value for name, (_, value) in self._entries.items()}

    def __getitem__(self, key: VariableKey) -> Any:
        return self._entries[_name_of(key)][1]

    def __setitem__(self, key: VariableKey, value: Any) -> None:
        if isinstance(key, RandomVariable):
            self.set(key, value)
            return
        name = str(key)
        if name not in self._entries:
            raise KeyError(f"Cannot assign unknown variable {name!r} by name; pass the RandomVariable")
        self._entries[name] = (self._entries[name][0], value)

    def __delitem__(self, key: VariableKey) -> None:
        del self._entries[_name_of(key)]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (RandomVariable, str)):
            return _name_of(key) in self._entries
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Assignment({self.to_dict()!r})"


class Distribution(MutableMapping):
    """
    Probability mass keyed by domain value (or a composite label).

    Values are non-negative floats kept in insertion order. ``normalize``
    works in place; ``rounded`` produces a presentation copy.
    """

    def __init__(self, values: Optional[Union[Mapping[Hashable, float], Iterable[Tuple[Hashable, float]]]] = None) -> None:
        self._p: Dict[Hashable, float] = {}
        if values is not None:
            items = values.items() if isinstance(values, Mapping) else values
            for key, value in items:
                self[key] = value

    def total(self) -> float:
        return float(sum(self._p.values()))

    def normalize(self) -> "Distribution":
        total = self.total()
        if total <= 0.0:
            raise UndefinedProbabilityError(
                "Cannot normalize a distribution with zero total mass "
                "(the evidence has probability zero under the network)"
            )
        for key in self._p:
            self._p[key] = self._p[key] / total
        return self

    def rounded(self, decimals: int = DEFAULT_DECIMALS) -> "Distribution":
        return Distribution((k, round_half_up(v, decimals)) for k, v in self._p.items())

    def to_dict(self) -> Dict[Hashable, float]:
        return dict(self._p)

    def __getitem__(self, key: Hashable) -> float:
        return self._p[key]

    def __setitem__(self, key: Hashable, value: float) -> None:
        value = float(value)
        if value < 0.0 or value != value:
            raise ValueError(f"Probability mass for {key!r} must be non-negative, got {value}")
        self._p[key] = value

    def __delitem__(self, key: Hashable) -> None:
        del self._p[key]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._p)

    def __len__(self) -> int:
        return len(self._p)

    def __repr__(self) -> str:
        return f"Distribution({self._p!r})"
