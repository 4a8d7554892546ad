from ._settings import Settings

__all__ = ["Settings"]
