"""
Identifier segmentation module

Splits a C function name into (action, middle, suffix) and derives the
default binding name from the three parts.

The tables below are ordered and first-match: a more specific literal must
come before any literal it starts (or ends) with, e.g. "getnum" before
"get" and "namelen" before "name". Reordering them changes generated names.
"""

from .codegen import upper_first

TABLE_VERSION = 3

# (C literal, binding verb)
ACTIONS: list[tuple[str, str]] = [
    ('getmaxnum', 'GetMaxNum'),
    ('putmaxnum', 'PutMaxNum'),
    ('checkout', 'CheckOut'),
    ('evaluate', 'Evaluate'),
    ('checkin', 'CheckIn'),
    ('analyze', 'Analyze'),
    ('getnum', 'GetNum'),
    ('append', 'Append'),
    ('unlink', 'Unlink'),
    ('delete', 'Delete'),
    ('remove', 'Remove'),
    ('check', 'Check'),
    ('empty', 'Empty'),
    ('print', 'Print'),
    ('write', 'Write'),
    ('read', 'Read'),
    ('make', 'Make'),
    ('link', 'Link'),
    ('get', 'Get'),
    ('set', 'Set'),
    ('put', 'Put'),
]

# (C literal, binding suffix)
SUFFIXES: list[tuple[str, str]] = [
    ('blocktriplets', 'BlockTriplets'),
    ('blocktriplet', 'BlockTriplet'),
    ('sliceconst', 'SliceConst'),
    ('slicetrip', 'SliceTrip'),
    ('listconst', 'ListConst'),
    ('summary', 'Summary'),
    ('namelen', 'NameLen'),
    ('numnz64', 'NumNz64'),
    ('numnz', 'NumNz'),
    ('tostr', 'ToStr'),
    ('list64', 'List64'),
    ('domain', 'Domain'),
    ('slice', 'Slice'),
    ('dotys', 'DotYs'),
    ('doty', 'DotY'),
    ('info', 'Info'),
    ('name', 'Name'),
    ('list', 'List'),
    ('file', 'File'),
    ('seq', 'Seq'),
    ('new', 'New'),
]

# Leading words of the middle segment that do not title cleanly.
MIDDLE_WORDS: list[tuple[str, str]] = [
    ('afebarf', 'AfeBarF'),
    ('afefrow', 'AfeFRow'),
    ('afefcol', 'AfeFCol'),
    ('afef', 'AfeF'),
    ('afeg', 'AfeG'),
    ('barxj', 'BarXj'),
    ('barsj', 'BarSj'),
]


def strip_namespace(name: str, prefix: str) -> str:
    """Remove the API prefix, with or without its underscore

    Examples:
        MSK_getnumcon -> getnumcon
        MSKrescode_enum -> rescode_enum
    """
    if name.startswith(prefix + '_'):
        return name[len(prefix) + 1:]
    if name.startswith(prefix):
        return name[len(prefix):]
    return name


def split_action(s: str, actions: list[tuple[str, str]] = ACTIONS) -> tuple[str, str]:
    """Strip the first matching action literal, returning (rest, action)"""
    for literal, verb in actions:
        if s.startswith(literal):
            return s[len(literal):], verb
    return s, ''


def split_suffix(s: str, suffixes: list[tuple[str, str]] = SUFFIXES) -> tuple[str, str]:
    """Strip the first matching suffix literal, returning (rest, suffix)"""
    for literal, canonical in suffixes:
        if s.endswith(literal):
            return s[:len(s) - len(literal)], canonical
    return s, ''


def segment(name: str) -> tuple[str, str, str]:
    """Split a namespace-stripped name into (action, middle, suffix)

    Examples:
        gettasknamelen -> ('Get', 'task', 'NameLen')
        optimize -> ('', 'optimize', '')
    """
    rest, action = split_action(name)
    middle, suffix = split_suffix(rest)
    return action, middle, suffix


def split_func_name(c_name: str, prefix: str) -> tuple[str, str, str]:
    return segment(strip_namespace(c_name, prefix))


def _replace_prefix(s: str, old: str, new: str) -> tuple[bool, str]:
    if s.startswith(old):
        return True, new + upper_first(s[len(old):])
    return False, s


def _replace_suffix(s: str, old: str, new: str) -> tuple[bool, str]:
    if s.endswith(old):
        return True, s[:len(s) - len(old)] + new
    return False, s


def mid_name(action: str, middle: str, suffix: str) -> str:
    """Title the middle segment"""
    if action == 'Append' and suffix == 'Domain':
        # cone domains: appendprimalexpconedomain -> AppendPrimalExpConeDomain
        s = middle
        _, s = _replace_prefix(s, 'primal', 'Primal')
        _, s = _replace_prefix(s, 'dual', 'Dual')
        _, s = _replace_suffix(s, 'cone', 'Cone')
        _, s = _replace_prefix(s, 'r', 'R')
        return upper_first(s)

    for literal, word in MIDDLE_WORDS:
        matched, s = _replace_prefix(middle, literal, word)
        if matched:
            return s
    return upper_first(middle)


def derive_func_name(c_name: str, prefix: str) -> str:
    """Heuristic binding name for a function

    Examples:
        MSK_gettasknamelen -> GetTaskNameLen
        MSK_appendrquadraticconedomain -> AppendRQuadraticConeDomain
    """
    action, middle, suffix = split_func_name(c_name, prefix)
    return f'{action}{mid_name(action, middle, suffix)}{suffix}'


def derive_enum_name(c_name: str, prefix: str) -> str:
    """Heuristic binding name for an enum

    Examples:
        MSKboundkey_enum -> Boundkey
    """
    s = strip_namespace(c_name, prefix)
    if s.endswith('_enum'):
        s = s[:-len('_enum')]
    return upper_first(s)
