"""Handler layer exports."""

from .anonymizing_proxy import AnonymizingProxy

__all__ = ["AnonymizingProxy"]
