"""Selection of policies by kind, with per-kind defaults.

A library names the kinds of policy it accepts and gives a default for each.
A caller passes any number of policies. Every policy must belong to one of
the accepted kinds, and no kind may be given twice. The result is a holder
that has one policy for every kind and exposes their attributes as its own.

A policy belongs to a kind when its ``policy_kind`` attribute is that kind.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=False)
class PolicyKind:
    """A tag naming a kind of policy; two kinds are equal only if identical."""

    name: str

    def __repr__(self) -> str:
        return f"PolicyKind({self.name!r})"


# Kinds used by the conversion routines.
PRECISION = PolicyKind("precision")
OUTPUT_FORMAT = PolicyKind("output_format")
SIGN = PolicyKind("sign")
TRAILING_ZERO = PolicyKind("trailing_zero")
BINARY_ROUNDING = PolicyKind("binary_rounding")
DECIMAL_ROUNDING = PolicyKind("decimal_rounding")
CACHE = PolicyKind("cache")
INPUT_VALIDATION = PolicyKind("input_validation")


class PolicyError(ValueError):
    """Base class of errors in a list of policies."""


class InvalidPolicyError(PolicyError):
    """A policy was given whose kind is not among the accepted kinds."""


class RepeatedPolicyError(PolicyError):
    """More than one policy was given for the same kind."""


def _kind_of(policy: Any) -> PolicyKind | None:
    return getattr(policy, "policy_kind", None)


@dataclass(frozen=True)
class KindDefault:
    """An accepted policy kind together with a generator of its default policy."""

    kind: PolicyKind
    generator: Callable[[], Any]

    def _matching(self, policies: Iterable[Any]) -> list[Any]:
        return [p for p in policies if _kind_of(p) is self.kind]

    def get_policy(self, policies: Iterable[Any]) -> Any:
        """The one policy of this kind among ``policies``, or a fresh default."""
        found = self._matching(policies)
        if len(found) > 1:
            raise RepeatedPolicyError(
                f"policy kind {self.kind.name!r} is specified {len(found)} times"
            )
        if found:
            return found[0]
        return self.generator()


class PolicyHolder:
    """One policy per kind; attributes not found on the holder come from the policies."""

    def __init__(self, policies: dict[PolicyKind, Any]) -> None:
        self._policies = dict(policies)

    def policy_for(self, kind: PolicyKind) -> Any:
        """The policy held for ``kind``; raises KeyError for a kind not held."""
        try:
            return self._policies[kind]
        except KeyError:
            raise KeyError(f"no policy of kind {kind.name!r}") from None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_policies":
            raise AttributeError(name)
        owners = [p for p in self._policies.values() if hasattr(p, name)]
        if not owners:
            raise AttributeError(f"no held policy has attribute {name!r}")
        if len(owners) > 1:
            raise AttributeError(f"attribute {name!r} is ambiguous among held policies")
        return getattr(owners[0], name)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k.name}={p!r}" for k, p in self._policies.items())
        return f"PolicyHolder({inner})"


def make_default(kind: PolicyKind, policy: Any) -> KindDefault:
    """Accept ``kind``, defaulting to the given policy object."""
    return KindDefault(kind, lambda: policy)


def make_default_generator(kind: PolicyKind, generator: Callable[[], Any]) -> KindDefault:
    """Accept ``kind``, defaulting to whatever ``generator()`` returns."""
    if not callable(generator):
        raise TypeError("the default generator must be callable")
    return KindDefault(kind, generator)


def make_default_list(*args: KindDefault) -> tuple[KindDefault, ...]:
    """Collect the accepted kinds and their defaults."""
    seen: set[int] = set()
    for entry in args:
        if not isinstance(entry, KindDefault):
            raise TypeError(f"expected a KindDefault, got {type(entry).__name__}")
        if id(entry.kind) in seen:
            raise ValueError(f"policy kind {entry.kind.name!r} has more than one default")
        seen.add(id(entry.kind))
    return tuple(args)


def make_policy_holder(defaults: Iterable[KindDefault], *args: Any) -> PolicyHolder:
    """Build a holder from the accepted kinds and the policies the caller gave."""
    defaults = tuple(defaults)
    accepted = {id(d.kind) for d in defaults}

    for policy in args:
        kind = _kind_of(policy)
        if kind is None or id(kind) not in accepted:
            raise InvalidPolicyError(f"an invalid policy is specified: {policy!r}")

    for default in defaults:
        found = default._matching(args)
        if len(found) > 1:
            raise RepeatedPolicyError(
                f"each policy kind should be specified at most once "
                f"({default.kind.name!r} given {len(found)} times)"
            )

    return PolicyHolder({d.kind: d.get_policy(args) for d in defaults})