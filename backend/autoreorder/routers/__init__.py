# Routers package: Thin Controllers
from autoreorder.routers import auto_reorder

__all__ = [
    "auto_reorder",
]
