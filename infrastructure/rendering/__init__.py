"""Source rendering for generated descriptor modules."""
from .renderer import Renderer

__all__ = ["Renderer"]
