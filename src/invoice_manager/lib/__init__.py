"""
Infrastructure helpers shared by the services layer.

Modules:
    logs: Logger factory
    objects: JSON serialization for Decimal and date values
    paths: Data directory resolution
    caches: diskcache-backed key/value storage
"""

from invoice_manager.lib import caches, logs, objects, paths

__all__ = ["caches", "logs", "objects", "paths"]
