"""Terminal menu model, unit-specification parsing and terminal vocabulary."""

__version__ = "0.1.0"
__all__ = ["constants", "terminal", "units", "menu", "demo"]