"""
cgo_bindgen - Go binding generation for C libraries

Normalizes the declarations of a C header (enums, typedefs, functions)
together with hand-written and imported metadata into consistently named
binding descriptors, and emits cgo wrapper code from them.
"""

from .config import ApiProfile
from .errors import (
    BindgenError, ConfigError, ConfigurationDriftError, SignatureError, TypeMappingConflict,
)
from .ir import Header, EnumDecl, EnumValue, TypedefEdge, FuncDecl, ParamDecl
from .naming import segment, split_func_name, derive_func_name, derive_enum_name
from .types import TypeMapper, CType, parse_c_type
from .overlay import (
    OverlayStore, FuncOverlay, EnumOverlay, DocTable,
    Enrichment, EnrichmentFunc, EnrichmentEnum, EnrichmentConst,
    load_overlay, load_doc_table, load_enrichment,
)
from .params import ParamRole, ParamDescriptor, classify_params
from .normalizer import (
    Normalizer, Model, FuncCategory, FuncDescriptor, EnumDescriptor, normalize,
)
from .codegen import CodeGen
from .enum import EnumGenerator
from .func import FuncGenerator
from .generator import Generator

__all__ = [
    'ApiProfile',
    'BindgenError', 'ConfigError', 'ConfigurationDriftError', 'SignatureError',
    'TypeMappingConflict',
    'Header', 'EnumDecl', 'EnumValue', 'TypedefEdge', 'FuncDecl', 'ParamDecl',
    'segment', 'split_func_name', 'derive_func_name', 'derive_enum_name',
    'TypeMapper', 'CType', 'parse_c_type',
    'OverlayStore', 'FuncOverlay', 'EnumOverlay', 'DocTable',
    'Enrichment', 'EnrichmentFunc', 'EnrichmentEnum', 'EnrichmentConst',
    'load_overlay', 'load_doc_table', 'load_enrichment',
    'ParamRole', 'ParamDescriptor', 'classify_params',
    'Normalizer', 'Model', 'FuncCategory', 'FuncDescriptor', 'EnumDescriptor', 'normalize',
    'CodeGen',
    'EnumGenerator',
    'FuncGenerator',
    'Generator',
]
