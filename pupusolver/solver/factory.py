"""
Strategy Registry Module - Maps strategy names to SolverStrategy classes.

Strategies add themselves with @register_strategy when the strategies
package is imported.
"""

import inspect
import logging
from typing import Any, Dict, List, Mapping, Type

from .base import SolverStrategy

logger = logging.getLogger(__name__)


_REGISTRY: Dict[str, Type[SolverStrategy]] = {}

DEFAULT_STRATEGY = "bfs"


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Class decorator adding a strategy to the registry under cls.name.

    Usage:
        @register_strategy
        class DepthLimitedStrategy(SolverStrategy):
            name = "dls"
            ...

    Raises:
        ValueError: If a different class already uses the name
    """
    existing = _REGISTRY.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(f"Strategy name '{cls.name}' already taken by {existing.__name__}")
    _REGISTRY[cls.name] = cls
    return cls


def get_strategy_class(name: str) -> Type[SolverStrategy]:
    """
    Look up a registered strategy class.

    Raises:
        ValueError: If no strategy has that name
    """
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(_REGISTRY)
        raise ValueError(f"Unknown strategy: {name}. Available: {available}") from None


def strategy_options(name: str, settings: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Pick the constructor arguments of a strategy out of a settings mapping.

    Args:
        name: Registered strategy name
        settings: Settings dictionary, e.g. from load_settings()

    Returns:
        Keyword arguments for create_strategy()
    """
    parameters = inspect.signature(get_strategy_class(name).__init__).parameters
    return {key: settings[key] for key in parameters if key != "self" and key in settings}


def create_strategy(name: str, **kwargs: Any) -> SolverStrategy:
    """
    Instantiate a strategy by name.

    Args:
        name: Strategy name ("bfs", "parallel_bfs")
        **kwargs: Constructor arguments, e.g. workers

    Returns:
        Strategy instance
    """
    strategy = get_strategy_class(name)(**kwargs)
    logger.debug(f"Created strategy '{name}' with {kwargs}")
    return strategy


def get_strategy_names() -> List[str]:
    """Registered strategy names in registration order."""
    return list(_REGISTRY)


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Name and description of every registered strategy.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [{"name": name, "description": cls.description} for name, cls in _REGISTRY.items()]


def get_default_strategy_name() -> str:
    """Strategy used when none is configured: "bfs", else the first registered."""
    if DEFAULT_STRATEGY in _REGISTRY:
        return DEFAULT_STRATEGY
    return next(iter(_REGISTRY), "")
