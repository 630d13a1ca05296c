"""
Normalizer module

Turns extracted declarations plus metadata overlays into binding
descriptors: one EnumDescriptor per enum and one FuncDescriptor per
function, minus whatever the overlay marks as skipped.

Per field, values are taken from the first source that has one:

    explicit overlay > enrichment > scraped doc table > heuristic/default

Derived values are written back into the overlay store slot so that a dump
of the store reproduces this run.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from .codegen import snake_to_camel
from .config import ApiProfile
from .errors import ConfigurationDriftError
from .ir import EnumDecl, EnumValue, FuncDecl, Header
from .log import get_logger
from .naming import derive_enum_name, mid_name, split_func_name
from .overlay import OverlayStore, clean_comment, normalize_value
from .params import ParamDescriptor, ParamRole, classify_params, receiver_role
from .types import TypeMapper

logger = get_logger('normalizer')


class FuncCategory(IntEnum):
    """Output group of a function; values define file order"""
    OTHER = 0
    ENV = 1
    TASK_PUT = 2
    TASK_GET = 3
    TASK_NAME = 4
    TASK_GETNUM = 5
    TASK_GETNUMNZ = 6
    TASK_SLICETRIP = 7
    TASK_APPEND = 8
    TASK_APPENDDOMAIN = 9
    TASK_GETLIST_OR_SLICE = 10
    TASK_PUTLIST_OR_SLICE = 11
    TASK_PUTMAXNUM = 12
    TASK_OTHER = 13

    @property
    def file_stem(self) -> str:
        if self is FuncCategory.OTHER:
            return 'other_funcs'
        return self.name.lower()

    @property
    def output_file(self) -> str:
        return f'{self.file_stem}.go'


_LIST_OR_SLICE = ('List', 'List64', 'Slice', 'SliceConst')


def categorize(is_env: bool, is_task: bool, action: str, suffix: str) -> FuncCategory:
    """Pick the output group; checked top to bottom"""
    if is_env:
        return FuncCategory.ENV
    if not is_task:
        return FuncCategory.OTHER
    if action == 'PutMaxNum':
        return FuncCategory.TASK_PUTMAXNUM
    if suffix == 'SliceTrip':
        return FuncCategory.TASK_SLICETRIP
    if suffix in ('Name', 'NameLen'):
        return FuncCategory.TASK_NAME
    if action == 'Get' and suffix in ('NumNz', 'NumNz64'):
        return FuncCategory.TASK_GETNUMNZ
    if action == 'Append' and suffix == 'Domain':
        return FuncCategory.TASK_APPENDDOMAIN
    if action == 'Append':
        return FuncCategory.TASK_APPEND
    if action == 'Get' and suffix in _LIST_OR_SLICE:
        return FuncCategory.TASK_GETLIST_OR_SLICE
    if action == 'Get':
        return FuncCategory.TASK_GET
    if action == 'GetNum':
        return FuncCategory.TASK_GETNUM
    if action == 'Put' and suffix in _LIST_OR_SLICE:
        return FuncCategory.TASK_PUTLIST_OR_SLICE
    if action == 'Put':
        return FuncCategory.TASK_PUT
    return FuncCategory.TASK_OTHER


def _split_lines(comment: str) -> tuple[str, ...]:
    if not comment:
        return ()
    return tuple(comment.split('\n'))


def enum_integer_type(underlying: str) -> str:
    if underlying == 'int':
        return 'int32'
    return 'uint32'


@dataclass(frozen=True)
class EnumDescriptor:
    """Normalized enum, ready for emission"""
    c_name: str
    binding_name: str
    integer_type: str
    skip: bool
    comment_lines: tuple[str, ...]
    deprecated: bool
    url: str
    constants: tuple[EnumValue, ...]
    constant_comment_pairs: tuple[tuple[str, str], ...] = ()
    is_equal_type: bool = False

    @property
    def constant_comments(self) -> dict[str, str]:
        return dict(self.constant_comment_pairs)

    def to_dict(self) -> dict:
        return {
            'c_name': self.c_name,
            'binding_name': self.binding_name,
            'integer_type': self.integer_type,
            'skip': self.skip,
            'comment': list(self.comment_lines),
            'deprecated': self.deprecated,
            'url': self.url,
            'constants': [{'name': v.name, 'value': v.value} for v in self.constants],
            'constant_comments': self.constant_comments,
            'is_equal_type': self.is_equal_type,
        }


@dataclass(frozen=True)
class FuncDescriptor:
    """Normalized function, ready for emission"""
    c_name: str
    binding_name: str
    comment_lines: tuple[str, ...]
    deprecated: bool
    url: str
    category: FuncCategory
    last_n_output: int
    params: tuple[ParamDescriptor, ...]
    c_return_type: str
    return_type: str  # '' for void, or when unmapped

    @property
    def is_env(self) -> bool:
        return bool(self.params) and self.params[0].role == ParamRole.RECEIVER_ENV

    @property
    def is_task(self) -> bool:
        return bool(self.params) and self.params[0].role == ParamRole.RECEIVER_TASK

    def inputs(self) -> list[ParamDescriptor]:
        """Parameters the caller passes, receivers and outputs excluded"""
        return [p for p in self.params if p.role == ParamRole.PLAIN_INPUT]

    def outputs(self) -> list[ParamDescriptor]:
        return [p for p in self.params if p.is_output]

    def to_dict(self) -> dict:
        return {
            'c_name': self.c_name,
            'binding_name': self.binding_name,
            'comment': list(self.comment_lines),
            'deprecated': self.deprecated,
            'url': self.url,
            'category': self.category.file_stem,
            'last_n_output': self.last_n_output,
            'params': [p.to_dict() for p in self.params],
            'c_return_type': self.c_return_type,
            'return_type': self.return_type,
        }


@dataclass
class Model:
    """Output of one normalization pass"""
    enums: list[EnumDescriptor] = field(default_factory=list)
    functions: list[FuncDescriptor] = field(default_factory=list)
    types: dict[str, str] = field(default_factory=dict)  # C type -> Go type, final table

    def functions_in(self, category: FuncCategory) -> list[FuncDescriptor]:
        return [f for f in self.functions if f.category == category]

    def get_enum(self, c_name: str) -> Optional[EnumDescriptor]:
        for enum in self.enums:
            if enum.c_name == c_name:
                return enum
        return None

    def get_function(self, c_name: str) -> Optional[FuncDescriptor]:
        for func in self.functions:
            if func.c_name == c_name:
                return func
        return None

    def to_dict(self) -> dict:
        return {
            'enums': [e.to_dict() for e in self.enums],
            'functions': [f.to_dict() for f in self.functions],
            'types': dict(self.types),
        }


class Normalizer:
    """Builds the binding model for one header"""

    def __init__(self, header: Header, store: OverlayStore, profile: ApiProfile,
                 types: Optional[TypeMapper] = None):
        self.header = header
        self.store = store
        self.profile = profile
        self.types = types if types is not None else TypeMapper.for_profile(profile)

    def run(self) -> Model:
        """Normalize every declaration

        Enums are processed first because typedefs and parameters may refer
        to them by name.
        """
        self._check_overlay()

        for c_type, go_type in self.store.types.items():
            self.types.register(c_type, go_type)

        model = Model()
        for decl in self.header.enums:
            desc = self.normalize_enum(decl)
            if not desc.skip:
                model.enums.append(desc)

        unresolved = self.types.resolve_typedefs(self.header.typedefs)
        if unresolved:
            logger.info('%d typedefs left unresolved', len(unresolved))

        for func in self.header.functions:
            desc = self.normalize_function(func)
            if desc is not None:
                model.functions.append(desc)
        model.types = dict(self.types.items())

        logger.info('normalized %d enums, %d functions', len(model.enums), len(model.functions))
        return model

    def _check_overlay(self):
        for name in self.store.enums:
            if self.header.get_enum(name) is None:
                raise ConfigurationDriftError(f'enum {name} is configured but not found in the header')

        known_funcs = {f.name for f in self.header.functions}
        for name in self.store.funcs:
            if name not in known_funcs:
                logger.warning('function %s is configured but not found in the header', name)

    def normalize_enum(self, decl: EnumDecl) -> EnumDescriptor:
        """Merge overlay data for an enum and register it as a type"""
        slot = self.store.enum_slot(decl.name)
        enrich = self.store.enrichment.find_enum(decl.name, self.profile.prefix)

        if not slot.binding_name:
            slot.binding_name = derive_enum_name(decl.name, self.profile.prefix)
        if not slot.integer_type:
            slot.integer_type = enum_integer_type(decl.integer_type)
        if enrich is not None:
            if not slot.comment and enrich.comment:
                slot.comment = clean_comment(enrich.comment)
            by_value = enrich.comments_by_value()
            for value in decl.values:
                if value.name in slot.constant_comments:
                    continue
                comment = by_value.get(normalize_value(value.value))
                if comment:
                    slot.constant_comments[value.name] = comment
        if not slot.deprecated:
            slot.deprecated = decl.name in self.store.docs.deprecated
        if not slot.url:
            slot.url = self.store.docs.urls.get(decl.name, '')

        # Skipped enums still name a type that functions may use.
        self.types.register(decl.name, slot.binding_name)

        return EnumDescriptor(
            c_name=decl.name,
            binding_name=slot.binding_name,
            integer_type=slot.integer_type,
            skip=slot.skip,
            comment_lines=_split_lines(slot.comment),
            deprecated=slot.deprecated,
            url=slot.url,
            constants=decl.values,
            constant_comment_pairs=tuple(
                (v.name, slot.constant_comments[v.name])
                for v in decl.values if v.name in slot.constant_comments
            ),
            is_equal_type=slot.is_equal_type,
        )

    def normalize_function(self, func: FuncDecl) -> Optional[FuncDescriptor]:
        """Merge overlay data for a function and classify its parameters"""
        slot = self.store.func_slot(func.name)
        if slot.skip:
            logger.debug('skipping %s', func.name)
            return None

        action, middle, suffix = split_func_name(func.name, self.profile.prefix)

        enrich = self.store.enrichment.find_func(func.name, self.profile.prefix)
        if enrich is not None:
            if not slot.comment and enrich.comment:
                slot.comment = clean_comment(enrich.comment)
            if not slot.binding_name and enrich.name:
                slot.binding_name = snake_to_camel(enrich.name)
        if not slot.binding_name:
            slot.binding_name = f'{action}{mid_name(action, middle, suffix)}{suffix}'
        if not slot.deprecated:
            slot.deprecated = func.name in self.store.docs.deprecated
        if not slot.url:
            slot.url = self.store.docs.urls.get(func.name, self.profile.default_doc_url)

        receiver = receiver_role(func, self.profile)
        category = categorize(
            receiver == ParamRole.RECEIVER_ENV,
            receiver == ParamRole.RECEIVER_TASK,
            action, suffix,
        )
        count, params = classify_params(func, action, suffix, slot.last_n_output,
                                        self.profile, self.types)

        if func.return_type == 'void':
            return_type = ''
        else:
            return_type = self.types.resolve(func.return_type, context=f'{func.name} return')

        return FuncDescriptor(
            c_name=func.name,
            binding_name=slot.binding_name,
            comment_lines=_split_lines(slot.comment),
            deprecated=slot.deprecated,
            url=slot.url,
            category=category,
            last_n_output=count,
            params=tuple(params),
            c_return_type=func.return_type,
            return_type=return_type,
        )


def normalize(header: Header, store: OverlayStore, profile: ApiProfile,
              types: Optional[TypeMapper] = None) -> Model:
    """Convenience wrapper around Normalizer(...).run()"""
    return Normalizer(header, store, profile, types).run()
