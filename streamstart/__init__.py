"""Text animation, countdown text, transform and OBJ mesh helpers for a pre-stream screen."""

__version__ = "0.1.0"

__all__ = ["animation", "countdown", "ease", "mat", "obj_parser"]