"""
Function binding generation module

Generates Go wrapper functions (or Env/Task methods) calling into C
through cgo.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen
from .params import ParamRole

if TYPE_CHECKING:
    from .config import ApiProfile
    from .normalizer import FuncDescriptor
    from .params import ParamDescriptor

# Go reserved keywords
GO_KEYWORDS = {
    'break', 'case', 'chan', 'const', 'continue', 'default', 'defer', 'else',
    'fallthrough', 'for', 'func', 'go', 'goto', 'if', 'import', 'interface',
    'map', 'package', 'range', 'return', 'select', 'struct', 'switch', 'type',
    'var',
}


def go_ident(name: str) -> str:
    """Parameter name usable in Go"""
    if name in GO_KEYWORDS:
        return name + '_'
    return name


def cgo_type_name(param: 'ParamDescriptor') -> str:
    """C type as cgo spells it: unsigned int -> C.uint"""
    c_type = param.c_type
    if c_type == 'unsigned int':
        return 'uint'
    if c_type == 'long long':
        return 'longlong'
    if 'enum ' in param.orig_c_type:
        return f'enum_{c_type}'
    if 'struct ' in param.orig_c_type:
        return f'struct_{c_type}'
    return c_type.replace(' ', '')


class FuncGenerator:
    """Generates function wrapper bindings"""

    def __init__(self, profile: 'ApiProfile'):
        self.profile = profile

    def imports(self, func: 'FuncDescriptor') -> set[str]:
        """Go packages the wrapper needs besides "C" """
        pkgs = set()
        for p in func.params:
            if p.orig_c_type in ('const char *', 'char *'):
                pkgs.add('unsafe')
        if func.return_type == self.profile.status_binding and self.profile.status_import:
            pkgs.add(self.profile.status_import)
        return pkgs

    def needs_stdlib(self, func: 'FuncDescriptor') -> bool:
        """C.free / C.calloc come from stdlib.h"""
        return any(
            p.orig_c_type == 'const char *' or p.role == ParamRole.STRING_OUTPUT
            for p in func.params
        )

    def go_params(self, func: 'FuncDescriptor') -> list[str]:
        """Go parameter list"""
        result = []
        for p in func.inputs():
            name = go_ident(p.name)
            if p.orig_c_type == 'const char *':
                result.append(f'{name} string')
            elif p.is_pointer:
                result.append(f'{name} *{p.binding_type}')
            else:
                result.append(f'{name} {p.binding_type}')
        return result

    def return_value_name(self, func: 'FuncDescriptor') -> str:
        for p in func.params:
            if p.name == 'r':
                return 'rescode'
        return 'r'

    def return_type(self, func: 'FuncDescriptor') -> str:
        """Go result list, '' when there is none"""
        outputs = func.outputs()
        if not outputs:
            if func.return_type == self.profile.status_binding:
                return 'error'
            return func.return_type

        results = []
        for p in outputs:
            if p.role == ParamRole.STRING_OUTPUT:
                results.append(f'{go_ident(p.name)} string')
            elif p.role == ParamRole.BOOL_OUTPUT:
                results.append(f'{go_ident(p.name)} bool')
            else:
                results.append(f'{go_ident(p.name)} {p.binding_type}')
        if func.return_type == self.profile.status_binding:
            results.append(f'{self.return_value_name(func)} error')
        elif func.return_type:
            results.append(f'{self.return_value_name(func)} {func.return_type}')
        return f'({", ".join(results)})'

    def c_call_inputs(self, func: 'FuncDescriptor') -> list[str]:
        """Arguments of the cgo call, in C parameter order"""
        result = []
        for p in func.params:
            name = go_ident(p.name)
            cgo = cgo_type_name(p)
            if p.role == ParamRole.RECEIVER_ENV:
                result.append('env.getEnv()')
            elif p.role == ParamRole.RECEIVER_TASK:
                result.append('task.task')
            elif p.role == ParamRole.STRING_OUTPUT:
                result.append(f'c_{p.name}')
            elif p.role == ParamRole.BOOL_OUTPUT:
                result.append(f'&c_{p.name}')
            elif p.role == ParamRole.POINTER_OUTPUT:
                result.append(f'(*C.{cgo})(&{name})')
            elif p.orig_c_type == self.profile.bool_type:
                result.append(f'boolToInt({name})')
            elif p.orig_c_type == 'const char *':
                result.append(f'c_{p.name}')
            elif p.orig_c_type == 'char *':
                result.append(f'(*C.char)(unsafe.Pointer({name}))')
            elif p.is_pointer:
                result.append(f'(*C.{cgo})({name})')
            else:
                result.append(f'C.{cgo}({name})')
        return result

    def _result_conversion(self, func: 'FuncDescriptor') -> tuple[str, str]:
        """Wrapping applied to the C result: (call prefix, call suffix)"""
        if func.c_return_type == self.profile.bool_type:
            return 'intToBool(', ')'
        if not func.return_type:
            return '', ''
        suffix = '.ToError()' if func.return_type == self.profile.status_binding else ''
        return f'{func.return_type}(', f'){suffix}'

    def generate(self, func: 'FuncDescriptor', gen: CodeGen):
        """Generate wrapper for a function"""
        self._gen_doc(func, gen)

        if func.is_task:
            header = f'func (task *Task) {func.binding_name}('
        elif func.is_env:
            header = f'func (env *Env) {func.binding_name}('
        else:
            header = f'func {func.binding_name}('
        params = self.go_params(func)
        results = self.return_type(func)
        tail = f') {results} {{' if results else ') {'

        if params:
            gen.line(header)
            gen.indent()
            for p in params:
                gen.line(f'{p},')
            gen.dedent()
            gen.line(tail)
        else:
            gen.line(header + tail)
        gen.indent()

        self._gen_conversions(func, gen)
        self._gen_call(func, gen)

        gen.dedent()
        gen.line('}')
        gen.line()

    def _gen_doc(self, func: 'FuncDescriptor', gen: CodeGen):
        sep = ',' if func.comment_lines else ''
        gen.line(f'// {func.binding_name} is wrapping [{func.c_name}]{sep}')
        for text in func.comment_lines:
            gen.comment(text)
        gen.line('//')
        gen.line(f'// [{func.c_name}] has following parameters:')
        for p in func.params:
            gen.line(f'//   - {p.name}: {p.orig_c_type}')
        if func.deprecated:
            gen.line('//')
            gen.line(f'// Deprecated: [{func.c_name}] is deprecated by the native library.')
        gen.line('//')
        gen.line(f'// [{func.c_name}]: {func.url}')

    def _gen_conversions(self, func: 'FuncDescriptor', gen: CodeGen):
        """Declare C-side temporaries for strings and bools"""
        for p in func.params:
            if p.role == ParamRole.PLAIN_INPUT and p.orig_c_type == 'const char *':
                gen.line(f'c_{p.name} := C.CString({go_ident(p.name)})')
                gen.line(f'defer C.free(unsafe.Pointer(c_{p.name}))')
                gen.line()
            elif p.role == ParamRole.STRING_OUTPUT:
                size = self.profile.string_buffer_size
                gen.line(f'c_{p.name} := (*C.char)(C.calloc({size}, 1))')
                gen.line(f'defer C.free(unsafe.Pointer(c_{p.name}))')
                gen.line()
            elif p.role == ParamRole.BOOL_OUTPUT:
                gen.line(f'var c_{p.name} C.{self.profile.bool_type}')
                gen.line()

    def _gen_call(self, func: 'FuncDescriptor', gen: CodeGen):
        prefix, suffix = self._result_conversion(func)
        outputs = func.outputs()
        has_result = bool(prefix)

        if not outputs:
            start = f'return {prefix}' if has_result else prefix
            self._gen_c_call(func, gen, start, suffix)
            return

        start = f'{self.return_value_name(func)} = {prefix}' if has_result else prefix
        self._gen_c_call(func, gen, start, suffix)
        gen.line()
        for p in outputs:
            if p.role == ParamRole.STRING_OUTPUT:
                gen.line(f'{go_ident(p.name)} = C.GoString(c_{p.name})')
            elif p.role == ParamRole.BOOL_OUTPUT:
                gen.line(f'{go_ident(p.name)} = c_{p.name} != 0')
        gen.line('return')

    def _gen_c_call(self, func: 'FuncDescriptor', gen: CodeGen, start: str, end: str):
        args = self.c_call_inputs(func)
        if not args:
            gen.line(f'{start}C.{func.c_name}(){end}')
            return
        with gen.block(f'{start}C.{func.c_name}(', f'){end}'):
            for arg in args:
                gen.line(f'{arg},')
