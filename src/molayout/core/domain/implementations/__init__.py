"""Layout engine implementations."""

from .force_directed_layout import ForceDirectedLayout

__all__ = ["ForceDirectedLayout"]
