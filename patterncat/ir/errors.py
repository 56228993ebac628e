from dataclasses import dataclass


@dataclass
class ValidationError:
    level: str
    message: str
    object_id: str


class CatalogError(Exception):
    """Base class for catalog tooling failures."""


class CatalogLoadError(CatalogError):
    """The catalog root or its index file cannot be read."""


class CatalogIntegrityError(CatalogError):
    """Raised when a catalog fails validation and the caller asked to fail hard."""
