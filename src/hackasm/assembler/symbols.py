"""
Hack Symbol Table
=================

Maps symbol names to 16-bit addresses. The table has no policy of its
own: add_entry() overwrites silently, and the assembler checks contains()
first so that a symbol, once bound, keeps its address for the whole run.
"""

from typing import Iterator, Optional

from hackasm.cpu import PREDEFINED_SYMBOLS


class SymbolTable:
    """
    Symbol name to address mapping.

    Example:
        >>> table = SymbolTable.with_predefined()
        >>> table.contains("SCREEN")
        True
        >>> table.add_entry("LOOP", 4)
        >>> table.get_address("LOOP")
        4
    """

    def __init__(self) -> None:
        self._table: dict[str, int] = {}

    @classmethod
    def with_predefined(cls) -> "SymbolTable":
        """Create a table seeded with the architecture's reserved symbols."""
        table = cls()
        for name, address in PREDEFINED_SYMBOLS.items():
            table.add_entry(name, address)
        return table

    def add_entry(self, name: str, address: int) -> None:
        """Bind name to address, replacing any existing binding."""
        self._table[name] = address

    def contains(self, name: str) -> bool:
        return name in self._table

    def get_address(self, name: str) -> Optional[int]:
        """Return the address bound to name, or None if undefined."""
        return self._table.get(name)

    def items(self) -> list[tuple[str, int]]:
        """Return (name, address) pairs sorted by name."""
        return sorted(self._table.items())

    def as_dict(self) -> dict[str, int]:
        return dict(self._table)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self._table)} symbols)"
