"""Repository interfaces for todolist.

The persistence "port" of the task store. Implementations (adapters) are in
``todolist.adapters``.
"""

from .repository import PersistenceAdapter

__all__ = ["PersistenceAdapter"]
