"""
Configuration modules for the map engine.
"""

from .config import Settings, settings
from .viewport_settings import ViewportConfig, WorldCanvas

__all__ = ['Settings', 'settings', 'ViewportConfig', 'WorldCanvas']
