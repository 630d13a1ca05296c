"""
Parameter role classification

Every parameter of a wrapped function gets exactly one role. Position 0 may
be a receiver (an env or task handle); the last N parameters are outputs the
native call writes through; everything else is a plain input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING

from .errors import SignatureError
from .types import parse_c_type

if TYPE_CHECKING:
    from .config import ApiProfile
    from .ir import FuncDecl
    from .types import TypeMapper


class ParamRole(Enum):
    RECEIVER_TASK = 'receiver_task'
    RECEIVER_ENV = 'receiver_env'
    PLAIN_INPUT = 'plain_input'
    STRING_OUTPUT = 'string_output'
    BOOL_OUTPUT = 'bool_output'
    POINTER_OUTPUT = 'pointer_output'


OUTPUT_ROLES = frozenset({ParamRole.STRING_OUTPUT, ParamRole.BOOL_OUTPUT, ParamRole.POINTER_OUTPUT})
RECEIVER_ROLES = frozenset({ParamRole.RECEIVER_TASK, ParamRole.RECEIVER_ENV})


@dataclass(frozen=True)
class ParamDescriptor:
    """A classified function parameter"""
    name: str
    orig_c_type: str    # as declared
    c_type: str         # without const and *
    binding_type: str   # mapped Go type, '' when unmapped or a receiver
    is_pointer: bool
    is_const: bool
    role: ParamRole

    @property
    def is_receiver(self) -> bool:
        return self.role in RECEIVER_ROLES

    @property
    def is_output(self) -> bool:
        return self.role in OUTPUT_ROLES

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'orig_c_type': self.orig_c_type,
            'c_type': self.c_type,
            'binding_type': self.binding_type,
            'is_pointer': self.is_pointer,
            'is_const': self.is_const,
            'role': self.role.value,
        }


@dataclass(frozen=True)
class ImpliedOutput:
    """Output arity implied by a function's name when none is configured"""
    matches: Callable[[str, str, bool, str], bool]  # (action, suffix, is_task, last param type)
    count: int
    role: Optional[ParamRole] = None                # None: decide from the type


# Checked in order, first match wins.
IMPLIED_OUTPUTS: list[ImpliedOutput] = [
    ImpliedOutput(lambda a, s, task, t: a == 'GetMaxNum', 1),
    ImpliedOutput(lambda a, s, task, t: a == 'GetNum', 1),
    ImpliedOutput(lambda a, s, task, t: task and a == 'Append' and s == 'Domain', 1),
    ImpliedOutput(lambda a, s, task, t: a == 'Get' and s in ('NumNz', 'NumNz64'), 1),
    ImpliedOutput(lambda a, s, task, t: a == 'Get' and s == 'NameLen', 1),
    ImpliedOutput(lambda a, s, task, t: a == 'Get' and s == 'Name', 1, ParamRole.STRING_OUTPUT),
    ImpliedOutput(lambda a, s, task, t: a == '' and s == 'ToStr' and t == 'char *', 1,
                  ParamRole.STRING_OUTPUT),
]


def implied_output(action: str, suffix: str, is_task: bool,
                   last_type: str) -> Optional[ImpliedOutput]:
    for rule in IMPLIED_OUTPUTS:
        if rule.matches(action, suffix, is_task, last_type):
            return rule
    return None


def receiver_role(func: 'FuncDecl', profile: 'ApiProfile') -> Optional[ParamRole]:
    """Role of the first parameter if it is an env or task handle"""
    if not func.params:
        return None
    first = func.params[0].type
    if first == profile.env_type:
        return ParamRole.RECEIVER_ENV
    if first == profile.task_type:
        return ParamRole.RECEIVER_TASK
    return None


def _output_role(type_str: str, profile: 'ApiProfile') -> ParamRole:
    if type_str == 'char *':
        return ParamRole.STRING_OUTPUT
    if type_str == profile.bool_pointer_type:
        return ParamRole.BOOL_OUTPUT
    return ParamRole.POINTER_OUTPUT


def classify_params(func: 'FuncDecl', action: str, suffix: str, last_n_output: int,
                    profile: 'ApiProfile',
                    types: 'TypeMapper') -> tuple[int, list[ParamDescriptor]]:
    """Assign a role to every parameter of func

    Returns the number of trailing output parameters actually used, which is
    last_n_output when set and otherwise the count implied by the name.
    Raises SignatureError when an output slot cannot be written through.
    """
    params = func.params
    receiver = receiver_role(func, profile)
    last_type = params[-1].type if params else ''

    forced_role = None
    count = last_n_output
    if count == 0:
        rule = implied_output(action, suffix, receiver == ParamRole.RECEIVER_TASK, last_type)
        if rule is not None:
            count, forced_role = rule.count, rule.role

    n_inputs = len(params) - (1 if receiver is not None else 0)
    if count < 0 or count > n_inputs:
        raise SignatureError(
            f'{func.name}: {count} output parameters requested but only {n_inputs} available')

    window_start = len(params) - count
    result = []
    for i, p in enumerate(params):
        ctype = parse_c_type(p.type)
        if i == 0 and receiver is not None:
            result.append(ParamDescriptor(
                name=p.name, orig_c_type=p.type, c_type=ctype.base, binding_type='',
                is_pointer=ctype.is_pointer, is_const=ctype.is_const, role=receiver,
            ))
            continue

        if i >= window_start:
            if not ctype.is_pointer or ctype.is_const:
                raise SignatureError(
                    f'{func.name}: output parameter {p.name} has type {p.type!r}, '
                    'which cannot be written through')
            role = forced_role or _output_role(p.type, profile)
        else:
            role = ParamRole.PLAIN_INPUT

        result.append(ParamDescriptor(
            name=p.name,
            orig_c_type=p.type,
            c_type=ctype.base,
            binding_type=types.resolve(p.type, context=func.name),
            is_pointer=ctype.is_pointer,
            is_const=ctype.is_const,
            role=role,
        ))
    return count, result
