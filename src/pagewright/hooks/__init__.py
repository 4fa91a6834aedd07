"""Filter and action registries."""

from pagewright.hooks.actions import ActionRegistry
from pagewright.hooks.filters import FilterRegistry
from pagewright.hooks.names import ActionName, FilterName
from pagewright.hooks.registry import HookRegistry

__all__ = ["ActionName", "ActionRegistry", "FilterName", "FilterRegistry", "HookRegistry"]
