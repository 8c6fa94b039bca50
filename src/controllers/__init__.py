"""Controllers layer"""

from .auto_update_controller import AutoUpdateController

__all__ = [
    "AutoUpdateController",
]
