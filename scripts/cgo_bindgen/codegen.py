"""
Code generation utilities

Provides the line builder used by the emitters and the small string
helpers shared by naming and emission.
"""


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self, indent_str: str = '\t'):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = indent_str  # gofmt indents with tabs

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def comment(self, text: str):
        """Add a // comment line, one per line of text"""
        for part in text.split('\n'):
            self.line(f'// {part}'.rstrip())

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines) + '\n'


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


def upper_first(s: str) -> str:
    """Upper-case the first letter if it is an ASCII lower-case letter

    Examples:
        task -> Task
        _foo -> _foo
    """
    if s and 'a' <= s[0] <= 'z':
        return s[0].upper() + s[1:]
    return s


def snake_to_camel(name: str) -> str:
    """Convert snake_case to CamelCase

    Examples:
        get_num_con -> GetNumCon
        put_c_j -> PutCJ
    """
    return ''.join(upper_first(part) for part in name.split('_'))


def strip_c_type_prefix(type_str: str) -> str:
    """Remove a leading enum/struct keyword from a C type"""
    for keyword in ('enum ', 'struct '):
        if type_str.startswith(keyword):
            return type_str[len(keyword):]
    return type_str


def c_string_literal(s: str) -> str:
    """Quote text for a Go string literal"""
    return '"' + s.replace('\\', '\\\\').replace('"', '\\"') + '"'
