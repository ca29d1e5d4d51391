"""Line conversion rules and their registry."""

from .base import ConversionRule
from .registry import RuleRegistry, create_default_registry

__all__ = ["ConversionRule", "RuleRegistry", "create_default_registry"]
