"""
Catalog error types
"""


class CatalogError(Exception):
    """Base class for errors raised by location catalogs"""


class ConflictError(CatalogError):
    """A write would collide with an existing or static location"""


class NotFoundError(CatalogError):
    """No location exists for the requested id"""
