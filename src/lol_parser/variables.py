"""Per-document variable table.

All declarations in a document share one flat namespace regardless of the
block they appear in. The parser owns the table while it runs and freezes it
before handing it to callers.
"""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from common.base.logging_config import get_logger

logger = get_logger(__name__)


class VariableTable:
    """Mapping of declared names to their plain-text values."""

    def __init__(self):
        self._values: Dict[str, str] = {}
        self._frozen = False

    def declare(self, name: str, value: str) -> None:
        """Bind name to value, overwriting any earlier declaration."""
        if self._frozen:
            raise RuntimeError("Variable table is frozen; parsing has finished")
        if name in self._values:
            logger.debug(f"Redeclaring variable '{name}': '{self._values[name]}' -> '{value}'")
        else:
            logger.debug(f"Declaring variable '{name}' = '{value}'")
        self._values[name] = value

    def lookup(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def freeze(self) -> "VariableTable":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def as_mapping(self) -> Mapping[str, str]:
        """Read-only view of the current bindings."""
        return MappingProxyType(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"VariableTable({self._values!r}, frozen={self._frozen})"
