"""Configuration helpers for preimage engines."""

from __future__ import annotations

import copy
from dataclasses import dataclass

from .arithmetic import get_arithmetic
from .predicates import ExactPredicate, IntegerPredicate


@dataclass
class PreimageConfig:
    """Defaults applied to engines built without an explicit predicate."""

    arithmetic: str = "int"
    check_invariants: bool = False

    def make_predicate(self) -> ExactPredicate:
        return IntegerPredicate(get_arithmetic(self.arithmetic))


_PREIMAGE_CONFIG = PreimageConfig()


def get_preimage_config() -> PreimageConfig:
    return copy.deepcopy(_PREIMAGE_CONFIG)


def set_preimage_config(config: PreimageConfig) -> None:
    global _PREIMAGE_CONFIG
    get_arithmetic(config.arithmetic)
    _PREIMAGE_CONFIG = copy.deepcopy(config)
