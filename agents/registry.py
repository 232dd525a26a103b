from __future__ import annotations

import importlib
from typing import Callable, Dict, List, Type, TypeVar

from .base_agent import BaseAgent

AGENT_REGISTRY: Dict[str, Type[BaseAgent]] = {}
AgentType = TypeVar("AgentType", bound=Type[BaseAgent])


def register_agent(key: str, cls: AgentType | None = None) -> AgentType | Callable[[AgentType], AgentType]:
    """
    Register an agent class under a key for config-based lookup.

    Can be used as a decorator or as a direct call:
    - `@register_agent("red_assignment")` above the class definition
    - `register_agent("red_assignment", AssignmentAgent)` after it
    """
    def decorator(target_cls: AgentType) -> AgentType:
        if key in AGENT_REGISTRY and AGENT_REGISTRY[key] is not target_cls:
            raise ValueError(f"Agent key '{key}' is already registered to {AGENT_REGISTRY[key].__name__}")
        AGENT_REGISTRY[key] = target_cls
        return target_cls

    if cls is None:
        return decorator

    return decorator(cls)


def registered_agents() -> List[str]:
    """Sorted registry keys."""
    return sorted(AGENT_REGISTRY)


def resolve_agent_class(type_ref: str) -> Type[BaseAgent]:
    """
    Resolve an agent class from a registry key or import path.

    If `type_ref` matches a registered key, the registry entry is returned.
    Otherwise, the string is treated as a module path like "module.Class".
    """
    if type_ref in AGENT_REGISTRY:
        return AGENT_REGISTRY[type_ref]

    if "." not in type_ref:
        raise ValueError(
            f"Unknown agent type '{type_ref}'. "
            f"Known keys: {', '.join(registered_agents())}; "
            "or provide an import path like 'pkg.module.Class'."
        )

    module_name, class_name = type_ref.rsplit(".", 1)
    module = importlib.import_module(module_name)
    cls = getattr(module, class_name)

    if not isinstance(cls, type) or not issubclass(cls, BaseAgent):
        raise TypeError(f"{type_ref} is not a BaseAgent subclass")

    return cls
