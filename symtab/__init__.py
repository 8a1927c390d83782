from symtab.errors import EmptyStructureError, IngestError, KeyParseError, SymbolTableError
from symtab.fifo import Queue
from symtab.indexing import OrderedMap, OrderedSymbolTable
from symtab.storage import IngestSummary, SymbolTableStore

__all__ = [
    "EmptyStructureError",
    "IngestError",
    "IngestSummary",
    "KeyParseError",
    "OrderedMap",
    "OrderedSymbolTable",
    "Queue",
    "SymbolTableError",
    "SymbolTableStore",
]
