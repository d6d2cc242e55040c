from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from luminary.types import Value


class Context:
    """A lexical scope: a symbol table plus a link to the enclosing scope.

    Lookups walk outward through the parent chain. Assignments and
    deletions only ever touch this scope's own table. Functions keep a
    reference to the context they were defined in, so later changes to
    that scope are visible when the function runs.
    """
    def __init__(self, display_name: str = '<program>', parent: Optional['Context'] = None):
        self.display_name = display_name
        self.parent = parent
        self.symbols: Dict[str, 'Value'] = {}

    def get(self, name: str) -> Optional['Value']:
        # A miss at the root is not an error: callers read it as null.
        if name in self.symbols:
            return self.symbols[name]
        if self.parent is not None:
            return self.parent.get(name)
        return None

    def set(self, name: str, value: 'Value') -> 'Value':
        self.symbols[name] = value
        return value

    def delete(self, name: str):
        self.symbols.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __repr__(self) -> str:
        return f"<context {self.display_name}>"
