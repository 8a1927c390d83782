
import csv
import logging
import math
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from symtab import config
from symtab.errors import IngestError, KeyParseError
from symtab.indexing import OrderedMap

logger = logging.getLogger("symtab.storage")

KEY_TYPES = {"str": str, "int": int, "float": float}


@dataclass
class IngestSummary:
    rows_read: int = 0
    inserted: int = 0
    updated: int = 0
    skipped: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class SymbolTableStore:
    # ------------------ Initialization ------------------

    def __init__(self, key_type: str = config.KEY_TYPE):
        """Create an empty store whose raw keys are coerced to key_type."""
        if key_type not in KEY_TYPES:
            raise ValueError(f"key_type must be one of {sorted(KEY_TYPES)}, got {key_type!r}")
        self.key_type: str = key_type
        self.index: OrderedMap = OrderedMap()

    # ------------------ Accessors ------------------
    def __len__(self) -> int:
        """Return the number of keys in the store."""
        return len(self.index)

    def is_empty(self) -> bool:
        return self.index.is_empty()

    # ------------------ Key parsing ------------------
    def parse_key(self, raw: Any) -> Any:
        """Coerce a raw key (URL segment, CSV cell, JSON scalar) to the key type."""
        if raw is None:
            raise KeyParseError("key is required")
        if isinstance(raw, str):
            raw = raw.strip()
            if not raw:
                raise KeyParseError("key must not be empty")
        if isinstance(raw, bool):
            raise KeyParseError(f"{raw!r} is not a valid {self.key_type} key")
        if isinstance(raw, float) and self.key_type == "int" and not raw.is_integer():
            raise KeyParseError(f"{raw!r} is not a valid int key")

        cast = KEY_TYPES[self.key_type]
        try:
            key = cast(raw)
        except (TypeError, ValueError):
            raise KeyParseError(f"{raw!r} is not a valid {self.key_type} key") from None

        # JSON has no NaN or Infinity
        if isinstance(key, float) and not math.isfinite(key):
            raise KeyParseError(f"{raw!r} cannot be used as a key; keys must be finite")
        return key

    # ------------------ Core mutations ------------------
    def put(self, raw_key: Any, value: Any) -> bool:
        """Insert or overwrite a key. Returns True if a new key was created."""
        key = self.parse_key(raw_key)
        before = len(self.index)
        self.index.put(key, value)
        return len(self.index) > before

    def delete(self, raw_key: Any) -> bool:
        """Delete a key; returns False if it was not present."""
        return self.index.delete(self.parse_key(raw_key))

    def delete_min(self) -> Any:
        """Delete the smallest key and return it."""
        key = self.index.min()
        self.index.delete_min()
        return key

    def delete_max(self) -> Any:
        """Delete the largest key and return it."""
        key = self.index.max()
        self.index.delete_max()
        return key

    # ------------------ Core queries ------------------
    def get(self, raw_key: Any, default: Any = None) -> Any:
        return self.index.get(self.parse_key(raw_key), default)

    def contains(self, raw_key: Any) -> bool:
        return self.parse_key(raw_key) in self.index

    def min(self) -> Any:
        return self.index.min()

    def max(self) -> Any:
        return self.index.max()

    def floor(self, raw_key: Any) -> Optional[Any]:
        return self.index.floor(self.parse_key(raw_key))

    def ceiling(self, raw_key: Any) -> Optional[Any]:
        return self.index.ceiling(self.parse_key(raw_key))

    def keys(self, limit: Optional[int] = None) -> List[Any]:
        """Return keys in ascending order, at most limit of them."""
        out: List[Any] = []
        for key in self.index:
            if limit is not None and len(out) >= limit:
                break
            out.append(key)
        return out

    def level_order(self) -> List[Any]:
        return list(self.index.level_order())

    def summary(self) -> Dict[str, Any]:
        """Size, shape and bounds of the index, plus an invariants check."""
        empty = self.index.is_empty()
        return {
            "size": len(self.index),
            "height": self.index.height(),
            "min": None if empty else self.index.min(),
            "max": None if empty else self.index.max(),
            "key_type": self.key_type,
            "invariants_ok": self.index.check(),
        }

    # ------------------ Data ingestion ------------------
    def ingest_data(
        self,
        file_path: str,
        key_column: str = config.KEY_COLUMN,
        value_column: str = config.VALUE_COLUMN,
    ) -> IngestSummary:
        """
        Reads key/value rows from a CSV file (header row required) into the index.
        Rows whose key is missing or cannot be parsed are skipped. The load is
        all-or-nothing: on any error the index keeps its previous contents.
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"CSV file not found: {file_path}")

        logger.info("Ingesting data from: %s", file_path)
        result = IngestSummary()
        # rows go into a copy; self.index is replaced only once every row is in
        staged = self.index.copy()

        with open(file_path, mode='r', newline='', encoding='utf-8') as csvfile:
            reader = csv.DictReader(csvfile)

            fieldnames = reader.fieldnames or []
            if key_column not in fieldnames:
                raise ValueError(f"key column '{key_column}' not found; available columns: {fieldnames}")
            if value_column not in fieldnames:
                logger.warning("value column '%s' not found; values will be empty", value_column)

            for row in reader:
                result.rows_read += 1
                try:
                    key = self.parse_key(row.get(key_column))
                except KeyParseError as e:
                    logger.debug("Skipping row %d: %s", result.rows_read, e)
                    result.skipped += 1
                    continue

                before = len(staged)
                try:
                    staged.put(key, row.get(value_column))
                except RecursionError:
                    raise IngestError(
                        f"row {result.rows_read}: tree too deep ({len(staged)} keys, height "
                        f"exceeds the recursion limit); the input is probably sorted by key. "
                        f"Nothing was loaded."
                    ) from None
                if len(staged) > before:
                    result.inserted += 1
                else:
                    result.updated += 1

                if result.rows_read % 100000 == 0:
                    logger.info("Progress: %s rows ingested...", f"{result.rows_read:,}")

        self.index = staged
        logger.info(
            "Ingestion done: %d rows, %d inserted, %d updated, %d skipped; index size %d",
            result.rows_read, result.inserted, result.updated, result.skipped, len(self.index),
        )
        return result
