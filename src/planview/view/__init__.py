"""Interactive view state and generation control."""

from .controller import Status, ViewController

__all__ = ["Status", "ViewController"]
