from . import categories

__all__ = [
    "categories",
]
