"""Exception hierarchy shared by the zdoc packages."""


class ZdocError(Exception):
    """Base class for errors reported to the user as actionable messages."""


class ConfigError(ZdocError):
    """Raised when a property store is missing, malformed or invalid."""


class CatalogError(ZdocError):
    """Raised when an API dump cannot be turned into a declaration catalog."""


class CompilerError(ZdocError):
    """Raised when a Lua stub cannot be generated or fails validation."""
