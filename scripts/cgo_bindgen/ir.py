"""
IR (Intermediate Representation) module

Reads and represents the declarations extracted from a C header:
enums, typedef aliases and function prototypes, all as plain strings.
"""

from dataclasses import dataclass, field
from typing import Optional
import json

from .errors import ConfigError


@dataclass(frozen=True)
class EnumValue:
    """Enum constant and its literal value as text"""
    name: str
    value: str


@dataclass(frozen=True)
class EnumDecl:
    """Enum type information"""
    name: str
    integer_type: str
    values: tuple[EnumValue, ...] = ()


@dataclass(frozen=True)
class TypedefEdge:
    """Typedef alias -> underlying type"""
    name: str
    type: str


@dataclass(frozen=True)
class ParamDecl:
    """Function parameter information"""
    name: str
    type: str


@dataclass(frozen=True)
class FuncDecl:
    """Function declaration information"""
    name: str
    params: tuple[ParamDecl, ...] = ()
    return_type: str = 'void'


@dataclass
class Header:
    """Declarations of one C header, in extraction order"""
    enums: list[EnumDecl] = field(default_factory=list)
    typedefs: list[TypedefEdge] = field(default_factory=list)
    functions: list[FuncDecl] = field(default_factory=list)

    @classmethod
    def load(cls, json_path: str) -> 'Header':
        """Load declarations from a JSON dump"""
        try:
            with open(json_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as exc:
            raise ConfigError(f'cannot read {json_path}: {exc}') from exc
        except ValueError as exc:
            raise ConfigError(f'failed to parse {json_path}: {exc}') from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Header':
        """Create a Header from a dictionary

        Raises ConfigError when a declaration lacks a required key.
        """
        if not isinstance(data, dict):
            raise ConfigError('header dump must be a JSON object')
        try:
            enums = [cls._parse_enum(d) for d in data.get('enums', [])]
            typedefs = [TypedefEdge(name=d['name'], type=d['type'])
                        for d in data.get('typedefs', [])]
            functions = [cls._parse_func(d) for d in data.get('functions', [])]
        except (KeyError, TypeError, AttributeError) as exc:
            raise ConfigError(f'malformed declaration in header dump: {exc!r}') from exc
        return cls(enums=enums, typedefs=typedefs, functions=functions)

    @staticmethod
    def _parse_enum(decl: dict) -> EnumDecl:
        """Parse enum declaration"""
        values = tuple(
            EnumValue(name=v['name'], value=str(v['value']))
            for v in decl.get('values', [])
        )
        return EnumDecl(
            name=decl['name'],
            integer_type=decl.get('integer_type', 'int'),
            values=values,
        )

    @staticmethod
    def _parse_func(decl: dict) -> FuncDecl:
        """Parse function declaration"""
        params = tuple(
            ParamDecl(name=p['name'], type=p['type'])
            for p in decl.get('parameters', [])
        )
        return FuncDecl(
            name=decl['name'],
            params=params,
            return_type=decl.get('return_type', 'void'),
        )

    def get_enum(self, name: str) -> Optional[EnumDecl]:
        """Get enum by name"""
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None
