"""
Workers package.
"""

from .bounded_pool_comp import BoundedWorkerPool

__all__ = ["BoundedWorkerPool"]
