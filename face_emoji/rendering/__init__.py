"""Rendering of tracking results"""

from .renderer import RenderingEngine, hex_to_bgr

__all__ = ['RenderingEngine', 'hex_to_bgr']
