"""Exception types shared by the symbol table modules."""


class SymbolTableError(Exception):
    """Base class for errors raised by this package."""


class EmptyStructureError(SymbolTableError, LookupError):
    """Raised when an operation needs at least one element and there is none."""


class KeyParseError(SymbolTableError, ValueError):
    """Raised when a raw key cannot be coerced to the configured key type."""


class IngestError(SymbolTableError):
    """Raised when a bulk load cannot be completed; the store is left unchanged."""
