"""
Main generator module

Turns a normalized Model into Go source files: one per enum, one for the
status-code enum and one per function category.
"""

import sys
from pathlib import Path
from typing import Optional

from .codegen import CodeGen, c_string_literal
from .config import ApiProfile
from .enum import EnumGenerator
from .func import FuncGenerator
from .log import get_logger
from .naming import strip_namespace
from .normalizer import EnumDescriptor, FuncCategory, Model

logger = get_logger('generator')

GENERATED_NOTICE = '// Code generated by cgo_bindgen. DO NOT EDIT.'


class Generator:
    """Main binding generator"""

    def __init__(self, model: Model, profile: ApiProfile):
        self.model = model
        self.profile = profile
        self.enum_gen = EnumGenerator(profile.prefix)
        self.func_gen = FuncGenerator(profile)

    def enum_file_name(self, enum: EnumDescriptor) -> str:
        if enum.c_name == self.profile.status_enum:
            return 'rescodes.go'
        return f'{strip_namespace(enum.c_name, self.profile.prefix)}.go'

    def _gen_preamble(self, gen: CodeGen, c_includes: list[str], imports: list[str]):
        gen.line(GENERATED_NOTICE)
        gen.line()
        gen.line(f'package {self.profile.package_name}')
        gen.line()
        for include in c_includes:
            gen.line(f'// #include <{include}>')
        gen.line('import "C"')
        gen.line()

        if not imports:
            return
        std = sorted(p for p in imports if '.' not in p.split('/')[0])
        third_party = sorted(p for p in imports if p not in std)
        with gen.block('import (', ')'):
            for pkg in std:
                gen.line(c_string_literal(pkg))
            if std and third_party:
                gen.line()
            for pkg in third_party:
                gen.line(c_string_literal(pkg))
        gen.line()

    def _includes(self, *extra: str) -> list[str]:
        includes = list(extra)
        if self.profile.include_header:
            includes.append(self.profile.include_header)
        return includes

    def render_enum(self, enum: EnumDescriptor) -> str:
        """Generate the file for one enum"""
        gen = CodeGen()
        imports = ['strconv'] if enum.constants and not enum.is_equal_type else []
        self._gen_preamble(gen, self._includes(), imports)
        self.enum_gen.generate(enum, gen)
        return gen.output()

    def render_category(self, category: FuncCategory) -> str:
        """Generate the file holding every function of a category"""
        funcs = self.model.functions_in(category)
        imports: set[str] = set()
        needs_stdlib = False
        for func in funcs:
            imports |= self.func_gen.imports(func)
            needs_stdlib = needs_stdlib or self.func_gen.needs_stdlib(func)

        gen = CodeGen()
        includes = self._includes('stdlib.h') if needs_stdlib else self._includes()
        self._gen_preamble(gen, includes, sorted(imports))
        for func in funcs:
            self.func_gen.generate(func, gen)
        return gen.output()

    def outputs(self) -> list[tuple[str, str]]:
        """All generated files as (file name, content), in emission order"""
        result = []
        for enum in self.model.enums:
            result.append((self.enum_file_name(enum), self.render_enum(enum)))
        for category in FuncCategory:
            result.append((category.output_file, self.render_category(category)))
        return result

    def write(self, output_dir: Optional[Path] = None) -> list[Path]:
        """Write every file into output_dir, or to stdout without one"""
        written = []
        if output_dir is not None:
            output_dir.mkdir(parents=True, exist_ok=True)
        for file_name, content in self.outputs():
            if output_dir is None:
                sys.stdout.write(content)
                continue
            path = output_dir / file_name
            logger.info('  %s', path)
            with open(path, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
            written.append(path)
        return written
