"""
Type mapping module

Maps raw C type strings to Go type names. The table starts from a fixed
base set, grows by one entry per generated enum and then by every typedef
alias that can be chased down to a known type.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING

from .codegen import strip_c_type_prefix
from .errors import TypeMappingConflict
from .log import get_logger

if TYPE_CHECKING:
    from .config import ApiProfile
    from .ir import TypedefEdge

logger = get_logger('types')

BASE_TYPES: dict[str, str] = {
    'int32_t': 'int32',
    'int64_t': 'int64',
    'int': 'int32',
    'long long': 'int64',
    'unsigned int': 'uint32',
    'size_t': 'uint64',
    'double': 'float64',
    'float': 'float32',
    'char': 'byte',
}


@dataclass(frozen=True)
class CType:
    """A C type split into its bare name and qualifiers"""
    base: str
    is_pointer: bool = False
    is_const: bool = False


def parse_c_type(type_str: str) -> CType:
    """Split qualifiers off a C type

    Examples:
        const double * -> CType('double', True, True)
        enum MSKboundkey_enum -> CType('MSKboundkey_enum')
    """
    is_pointer = type_str.endswith(' *')
    base = type_str[:-2] if is_pointer else type_str
    is_const = base.startswith('const ')
    if is_const:
        base = base[len('const '):]
    return CType(base=strip_c_type_prefix(base.strip()), is_pointer=is_pointer, is_const=is_const)


class TypeMapper:
    """Append-only C type -> Go type table"""

    def __init__(self, base: Optional[dict[str, str]] = None):
        self._types: dict[str, str] = dict(BASE_TYPES if base is None else base)

    @classmethod
    def for_profile(cls, profile: 'ApiProfile') -> 'TypeMapper':
        """Base table plus the library's boolean and status-code types"""
        mapper = cls()
        mapper.register(profile.bool_type, 'bool')
        mapper.register(profile.status_type, profile.status_binding)
        for c_type, go_type in profile.extra_types.items():
            mapper.register(c_type, go_type)
        return mapper

    def register(self, c_type: str, go_type: str):
        """Add a mapping; re-adding the same mapping is a no-op"""
        existing = self._types.get(c_type)
        if existing is None:
            self._types[c_type] = go_type
            return
        if existing != go_type:
            raise TypeMappingConflict(
                f'{c_type} is already mapped to {existing}, refusing to remap it to {go_type}')

    def has(self, c_type: str) -> bool:
        return c_type in self._types

    def lookup(self, c_type: str) -> Optional[str]:
        """Look up a bare type name"""
        return self._types.get(c_type)

    def resolve(self, type_str: str, context: str = '') -> str:
        """Map a raw C type, logging and returning '' when unknown"""
        bare = parse_c_type(type_str).base
        go_type = self._types.get(bare)
        if go_type is None:
            where = f' in {context}' if context else ''
            logger.warning('cannot find mapping for type %s%s', type_str, where)
            return ''
        return go_type

    def resolve_typedefs(self, edges: Iterable['TypedefEdge']) -> list[str]:
        """Register every alias whose chain ends at a known type

        Passes repeat until one adds nothing, so the order of the edges does
        not matter. Returns the aliases that stayed unresolved.
        """
        pending = [e for e in edges if e.name not in self._types]
        while pending:
            remaining = []
            for edge in pending:
                target = self._types.get(strip_c_type_prefix(edge.type))
                if target is None:
                    remaining.append(edge)
                else:
                    self.register(edge.name, target)
            if len(remaining) == len(pending):
                break
            pending = remaining

        for edge in pending:
            logger.warning('cannot find mapping for %s -> %s', edge.name, edge.type)
        return [e.name for e in pending]

    def items(self) -> list[tuple[str, str]]:
        return list(self._types.items())
