"""
Metadata overlay module

Holds everything known about a declaration besides its C signature:

- the explicit overlay document (hand-edited YAML, keyed by C name),
- the scraped documentation table (doc URLs and deprecated names),
- enrichment imported from another language's bindings of the same API.

Overlay documents use these keys per entry:

    go_name, skip, comment, is_deprecated, url        (enums and funcs)
    constant_comments, integer_type, is_equal_type    (enums)
    last_n_param_output                               (funcs)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError
from .log import get_logger
from .naming import strip_namespace

logger = get_logger('overlay')


@dataclass
class FuncOverlay:
    """Per-function overlay entry"""
    binding_name: str = ''
    skip: bool = False
    comment: str = ''
    deprecated: bool = False
    url: str = ''
    last_n_output: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> 'FuncOverlay':
        return cls(
            binding_name=_as_str(data.get('go_name')),
            skip=bool(data.get('skip', False)),
            comment=_as_str(data.get('comment')),
            deprecated=bool(data.get('is_deprecated', False)),
            url=_as_str(data.get('url')),
            last_n_output=_as_count(data.get('last_n_param_output'), 'last_n_param_output'),
        )

    def to_dict(self) -> dict:
        result: dict[str, Any] = {}
        if self.binding_name:
            result['go_name'] = self.binding_name
        if self.skip:
            result['skip'] = True
        if self.comment:
            result['comment'] = self.comment
        if self.deprecated:
            result['is_deprecated'] = True
        if self.url:
            result['url'] = self.url
        if self.last_n_output:
            result['last_n_param_output'] = self.last_n_output
        return result


@dataclass
class EnumOverlay:
    """Per-enum overlay entry"""
    binding_name: str = ''
    skip: bool = False
    comment: str = ''
    deprecated: bool = False
    url: str = ''
    constant_comments: dict[str, str] = field(default_factory=dict)
    integer_type: str = ''
    is_equal_type: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> 'EnumOverlay':
        comments = data.get('constant_comments') or {}
        if not isinstance(comments, dict):
            raise ConfigError('constant_comments must be a mapping')
        return cls(
            binding_name=_as_str(data.get('go_name')),
            skip=bool(data.get('skip', False)),
            comment=_as_str(data.get('comment')),
            deprecated=bool(data.get('is_deprecated', False)),
            url=_as_str(data.get('url')),
            constant_comments={str(k): _as_str(v) for k, v in comments.items()},
            integer_type=_as_str(data.get('integer_type')),
            is_equal_type=bool(data.get('is_equal_type', False)),
        )

    def to_dict(self) -> dict:
        result: dict[str, Any] = {}
        if self.binding_name:
            result['go_name'] = self.binding_name
        if self.skip:
            result['skip'] = True
        if self.comment:
            result['comment'] = self.comment
        if self.deprecated:
            result['is_deprecated'] = True
        if self.url:
            result['url'] = self.url
        if self.constant_comments:
            result['constant_comments'] = dict(self.constant_comments)
        if self.integer_type:
            result['integer_type'] = self.integer_type
        if self.is_equal_type:
            result['is_equal_type'] = True
        return result


@dataclass
class DocTable:
    """Scraped documentation: C name -> URL, and deprecated C names"""
    urls: dict[str, str] = field(default_factory=dict)
    deprecated: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class EnrichmentFunc:
    """A function from the auxiliary bindings, named snake_case"""
    name: str
    comment: str = ''
    struct_name: str = ''


@dataclass(frozen=True)
class EnrichmentConst:
    name: str
    value: str
    comment: str = ''


@dataclass(frozen=True)
class EnrichmentEnum:
    name: str
    comment: str = ''
    consts: tuple[EnrichmentConst, ...] = ()

    def comments_by_value(self) -> dict[str, str]:
        """Constant comments keyed by normalized value, first one wins"""
        result: dict[str, str] = {}
        for const in self.consts:
            if const.comment:
                result.setdefault(normalize_value(const.value), const.comment)
        return result


class Enrichment:
    """Index over the auxiliary bindings' functions and enums"""

    def __init__(self, funcs: Optional[list[EnrichmentFunc]] = None,
                 enums: Optional[list[EnrichmentEnum]] = None):
        self.funcs = list(funcs or [])
        self.enums = list(enums or [])
        self._funcs_by_key: dict[str, EnrichmentFunc] = {}
        for func in self.funcs:
            self._funcs_by_key.setdefault(func.name.replace('_', ''), func)
        self._enums_by_key: dict[str, EnrichmentEnum] = {}
        for enum in self.enums:
            self._enums_by_key.setdefault(_enum_key(enum.name), enum)

    def find_func(self, c_name: str, prefix: str) -> Optional[EnrichmentFunc]:
        """Match a C function by dropping underscores from the snake name

        get_task_name_len is matched against <prefix>_gettasknamelen.
        """
        if not c_name.startswith(prefix + '_'):
            return None
        return self._funcs_by_key.get(c_name[len(prefix) + 1:])

    def find_enum(self, c_name: str, prefix: str) -> Optional[EnrichmentEnum]:
        key = strip_namespace(c_name, prefix)
        if key.endswith('_enum'):
            key = key[:-len('_enum')]
        return self._enums_by_key.get(_enum_key(key))


def _enum_key(name: str) -> str:
    return name.replace('_', '').lower()


def normalize_value(value: Any) -> str:
    """Canonical text of an enum value so 0x10 and 16 compare equal"""
    text = str(value).strip()
    try:
        return str(int(text, 0))
    except ValueError:
        return text


def clean_comment(comment: str) -> str:
    """Reformat a doc comment from the auxiliary bindings

    Markdown headings become plain labels, argument bullets are indented,
    and the trailing cross-reference lines are dropped.
    """
    result: list[str] = []
    for line in comment.split('\n'):
        if '# Argument' in line:
            result.append('\nArguments:')
        elif line.startswith('- `'):
            result.append('  ' + line.replace('_`', '`'))
        elif '# Returns' in line:
            result.append('\nReturns:')
        elif line.startswith('See ['):
            if result and result[-1] == '':
                result.pop()
        elif 'Full documentation' in line:
            continue
        else:
            result.append(line)
    return '\n'.join(result).strip('\n')


@dataclass
class OverlayStore:
    """All metadata overlays for one generator run"""
    funcs: dict[str, FuncOverlay] = field(default_factory=dict)
    enums: dict[str, EnumOverlay] = field(default_factory=dict)
    types: dict[str, str] = field(default_factory=dict)
    docs: DocTable = field(default_factory=DocTable)
    enrichment: Enrichment = field(default_factory=Enrichment)

    def func_slot(self, name: str) -> FuncOverlay:
        """Get the entry for a function, creating an empty one"""
        if name not in self.funcs:
            self.funcs[name] = FuncOverlay()
        return self.funcs[name]

    def enum_slot(self, name: str) -> EnumOverlay:
        """Get the entry for an enum, creating an empty one"""
        if name not in self.enums:
            self.enums[name] = EnumOverlay()
        return self.enums[name]

    def to_dict(self) -> dict:
        """Serialize back to the overlay document shape"""
        return {
            'enums': {name: e.to_dict() for name, e in self.enums.items()},
            'funcs': {name: f.to_dict() for name, f in self.funcs.items()},
            'type_to_go_type': dict(self.types),
        }

    def dump(self, path: Path):
        """Write the overlay document as YAML"""
        text = yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)
        path.write_text(text, encoding='utf-8')


def _as_str(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise ConfigError(f'cannot read {path}: {exc}') from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f'failed to parse {path}: {exc}') from exc


def _as_mapping(value: Any, label: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f'{label} must be a mapping')
    return value


def _as_count(value: Any, label: str) -> int:
    """Non-negative integer entry, 0 when absent"""
    if value is None:
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f'{label} must be an integer, got {value!r}') from exc
    if isinstance(value, bool) or count < 0:
        raise ConfigError(f'{label} must be a non-negative integer, got {value!r}')
    return count


def overlay_from_dict(data: dict) -> OverlayStore:
    """Build a store from an overlay document"""
    data = _as_mapping(data, 'overlay document')
    funcs = {
        str(name): FuncOverlay.from_dict(_as_mapping(entry, f'funcs.{name}'))
        for name, entry in _as_mapping(data.get('funcs'), 'funcs').items()
    }
    enums = {
        str(name): EnumOverlay.from_dict(_as_mapping(entry, f'enums.{name}'))
        for name, entry in _as_mapping(data.get('enums'), 'enums').items()
    }
    types = {
        str(k): str(v)
        for k, v in _as_mapping(data.get('type_to_go_type'), 'type_to_go_type').items()
    }
    return OverlayStore(funcs=funcs, enums=enums, types=types)


def load_overlay(path: Path) -> OverlayStore:
    """Load the explicit overlay document"""
    store = overlay_from_dict(_read_yaml(path))
    logger.debug('loaded overlay %s: %d enums, %d funcs', path, len(store.enums), len(store.funcs))
    return store


def load_doc_table(urls_path: Optional[Path] = None,
                   deprecated_path: Optional[Path] = None) -> DocTable:
    """Load the scraped URL table and deprecated set"""
    table = DocTable()
    if urls_path is not None:
        urls = _as_mapping(_read_yaml(urls_path), str(urls_path))
        table.urls = {str(k): str(v) for k, v in urls.items()}
    if deprecated_path is not None:
        deprecated = _read_yaml(deprecated_path) or []
        if isinstance(deprecated, (dict, list)):
            table.deprecated = {str(name) for name in deprecated}
        else:
            raise ConfigError(f'{deprecated_path} must be a mapping or a list')
    return table


def enrichment_from_data(funcs_data: Any, enums_data: Any) -> Enrichment:
    """Build the enrichment index from the auxiliary bindings' dumps"""
    funcs = []
    for entry in funcs_data or []:
        if not isinstance(entry, dict):
            raise ConfigError('enrichment functions must be a list of mappings')
        funcs.append(EnrichmentFunc(
            name=_as_str(entry.get('name')),
            comment=_as_str(entry.get('comment')),
            struct_name=_as_str(entry.get('struct_name')),
        ))

    if isinstance(enums_data, dict):
        enum_entries = list(enums_data.values())
    else:
        enum_entries = list(enums_data or [])
    enums = []
    for entry in enum_entries:
        if not isinstance(entry, dict):
            raise ConfigError('enrichment enums must be mappings')
        consts = []
        for c in entry.get('enum_consts') or []:
            c = _as_mapping(c, 'enrichment enum constant')
            consts.append(EnrichmentConst(
                name=_as_str(c.get('name')),
                value=_as_str(c.get('value')),
                comment=_as_str(c.get('comment')),
            ))
        enums.append(EnrichmentEnum(
            name=_as_str(entry.get('name')),
            comment=_as_str(entry.get('comment')),
            consts=tuple(consts),
        ))
    return Enrichment(funcs=funcs, enums=enums)


def load_enrichment(funcs_path: Optional[Path] = None,
                    enums_path: Optional[Path] = None) -> Enrichment:
    funcs_data = _read_yaml(funcs_path) if funcs_path is not None else None
    enums_data = _read_yaml(enums_path) if enums_path is not None else None
    return enrichment_from_data(funcs_data, enums_data)
