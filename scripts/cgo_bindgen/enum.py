"""
Enum binding generation module

Generates a Go named integer type, its constants and a String method.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, c_string_literal
from .overlay import normalize_value

if TYPE_CHECKING:
    from .normalizer import EnumDescriptor


class EnumGenerator:
    """Generates enum constant bindings"""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def constant_name(self, c_name: str) -> str:
        """Go name for an enum constant: MSK_BK_LO -> BK_LO"""
        for pfx in (self.prefix + '_', self.prefix):
            if c_name.startswith(pfx):
                return c_name[len(pfx):]
        return c_name

    def generate(self, enum: 'EnumDescriptor', gen: CodeGen):
        """Generate type, constants and String() for one enum"""
        name = enum.binding_name

        gen.line(f'// {name} is {enum.c_name}')
        if enum.comment_lines:
            gen.line('//')
            for text in enum.comment_lines:
                gen.comment(text)
        if enum.deprecated:
            gen.line('//')
            gen.line(f'// Deprecated: {enum.c_name} is deprecated by the native library.')
        if enum.url:
            gen.line('//')
            gen.line(f'// [{enum.c_name}]: {enum.url}')
        equals = ' = ' if enum.is_equal_type else ' '
        gen.line(f'type {name}{equals}{enum.integer_type}')
        gen.line()

        if not enum.constants:
            return

        comments = enum.constant_comments
        with gen.block('const (', ')'):
            for value in enum.constants:
                text = f'{self.constant_name(value.name)} {name} = C.{value.name}'
                comment = comments.get(value.name)
                if comment:
                    # constant comments stay on one line
                    text += f' // {" ".join(comment.split())}'
                gen.line(text)
        gen.line()

        if enum.is_equal_type:
            return

        seen: set[str] = set()
        with gen.block(f'var _{name}_map = map[{name}]string{{'):
            for value in enum.constants:
                # aliases share a value, Go rejects duplicate map keys
                key = normalize_value(value.value)
                if key in seen:
                    continue
                seen.add(key)
                short = self.constant_name(value.name)
                gen.line(f'{short}: {c_string_literal(short)},')
        gen.line()

        with gen.block(f'func (e {name}) String() string {{'):
            with gen.block(f'if v, ok := _{name}_map[e]; ok {{'):
                gen.line('return v')
            gen.line(f'return "{name}(" + strconv.FormatInt(int64(e), 10) + ")"')
        gen.line()
