"""Evaluation of library and argument rules against the host."""

import os
import platform
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Sequence

from .models import FeatureRule, OsPredicate, OsRule, Rule

# Feature flags this launcher can honour. None are implemented yet, so every
# feature rule evaluates as unmatched.
SUPPORTED_FEATURES: FrozenSet[str] = frozenset()

_OS_NAMES = {
    "windows": "windows",
    "linux": "linux",
    "darwin": "osx",
}

_ARCH_NAMES = {
    "amd64": "x86_64",
    "x86_64": "x86_64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


@dataclass(frozen=True)
class HostInfo:
    """Operating system descriptor that rules are matched against."""
    os_name: str
    arch: str
    unix: bool = True
    features: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def current(cls) -> "HostInfo":
        system = platform.system().lower()
        machine = platform.machine().lower()
        return cls(
            os_name=_OS_NAMES.get(system, system),
            arch=_ARCH_NAMES.get(machine, machine),
            unix=os.name == "posix",
        )

    @property
    def classpath_separator(self) -> str:
        return ":" if self.unix else ";"


def _os_matches(predicate: OsPredicate, host: HostInfo) -> bool:
    if predicate.name is not None and predicate.name != host.os_name:
        return False
    if predicate.arch is not None:
        # 32-bit libraries also run on a 64-bit x86 host
        if predicate.arch == "x86":
            return host.arch in ("x86", "x86_64")
        return predicate.arch == host.arch
    return True


def _features_match(rule: FeatureRule, host: HostInfo) -> bool:
    for flag, required in rule.features.items():
        if flag not in SUPPORTED_FEATURES or host.features.get(flag, False) != required:
            return False
    return True


def rule_matches(rule: Rule, host: HostInfo) -> bool:
    """Check whether a single rule's predicate holds on ``host``."""
    if isinstance(rule, OsRule):
        return _os_matches(rule.os, host)
    if isinstance(rule, FeatureRule):
        return _features_match(rule, host)
    raise TypeError(f"Unsupported rule: {rule!r}")


def check_rules(rules: Optional[Sequence[Rule]], host: HostInfo) -> bool:
    """Evaluate a rules list; an absent list always allows."""
    if rules is None:
        return True

    allow = True
    for rule in rules:
        matches = rule_matches(rule, host)
        if rule.action == "allow":
            if not matches:
                allow = False
        elif matches:
            allow = False
    return allow
