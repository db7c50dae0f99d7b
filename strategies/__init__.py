"""Auto-discovery of built-in Strategy subclasses.

Every ``*.py`` module in this package is imported and scanned for concrete
:class:`strategy.Strategy` subclasses; strategies are looked up by their
``name`` property.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path

from strategy import SolverConfig, Strategy

log = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).resolve().parent

DEFAULT_STRATEGY = "simple"


def _subclasses_in_module(mod) -> list[type[Strategy]]:
    found: list[type[Strategy]] = []
    for attr_name in dir(mod):
        obj = getattr(mod, attr_name)
        if (
            isinstance(obj, type)
            and issubclass(obj, Strategy)
            and obj is not Strategy
            and not inspect.isabstract(obj)
            and obj.__module__ == mod.__name__
        ):
            found.append(obj)
    return found


def discover_strategies() -> dict[str, type[Strategy]]:
    """Return ``{name: class}`` for every strategy in this package."""
    found: dict[str, type[Strategy]] = {}
    for info in sorted(pkgutil.iter_modules([str(_PKG_DIR)]), key=lambda i: i.name):
        mod = importlib.import_module(f"{__name__}.{info.name}")
        for cls in _subclasses_in_module(mod):
            found[cls().name] = cls
    return found


def create_strategy(name: str, config: SolverConfig | None = None) -> Strategy:
    """Instantiate the strategy called *name*; unknown names get the default."""
    classes = discover_strategies()
    cls = classes.get(name.lower())
    if cls is None:
        log.warning("unknown strategy %r, using %r (available: %s)",
                    name, DEFAULT_STRATEGY, ", ".join(sorted(classes)))
        cls = classes[DEFAULT_STRATEGY]
    return cls(config)
