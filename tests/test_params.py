import pytest

from cgo_bindgen import FuncDecl, ParamDecl, SignatureError, TypeMapper
from cgo_bindgen.naming import split_func_name
from cgo_bindgen.params import ParamRole, classify_params, implied_output, receiver_role


def func_decl(name, *params, return_type='NSrescodee'):
    return FuncDecl(name=name, params=tuple(ParamDecl(n, t) for n, t in params),
                    return_type=return_type)


def classify(func, profile, last_n_output=0):
    action, _, suffix = split_func_name(func.name, profile.prefix)
    return classify_params(func, action, suffix, last_n_output, profile,
                           TypeMapper.for_profile(profile))


def roles(params):
    return [p.role for p in params]


def test_getnum_implies_one_output(profile):
    func = func_decl('NS_getnumcon', ('task', 'NStask_t'), ('numcon', 'int32_t *'))
    count, params = classify(func, profile)
    assert count == 1
    assert roles(params) == [ParamRole.RECEIVER_TASK, ParamRole.POINTER_OUTPUT]
    assert params[0].binding_type == ''
    assert params[1].binding_type == 'int32'
    assert params[1].is_pointer and not params[1].is_const


def test_get_name_forces_string_output(profile):
    func = func_decl('NS_gettaskname',
                     ('task', 'NStask_t'), ('sizetaskname', 'int32_t'), ('taskname', 'char *'))
    count, params = classify(func, profile)
    assert count == 1
    assert roles(params) == [
        ParamRole.RECEIVER_TASK, ParamRole.PLAIN_INPUT, ParamRole.STRING_OUTPUT,
    ]


def test_tostr_on_free_function(profile):
    func = func_decl('NS_callbackcodetostr', ('code', 'int32_t'), ('callbackcodestr', 'char *'))
    count, params = classify(func, profile)
    assert count == 1
    assert roles(params) == [ParamRole.PLAIN_INPUT, ParamRole.STRING_OUTPUT]


def test_append_domain_needs_task_receiver(profile):
    task_func = func_decl('NS_appendrplusdomain',
                          ('task', 'NStask_t'), ('n', 'int64_t'), ('domidx', 'int64_t *'))
    assert classify(task_func, profile)[0] == 1

    free_func = func_decl('NS_appendrplusdomain', ('n', 'int64_t'), ('domidx', 'int64_t *'))
    count, params = classify(free_func, profile)
    assert count == 0
    assert roles(params) == [ParamRole.PLAIN_INPUT, ParamRole.PLAIN_INPUT]


def test_explicit_count_overrides_name(profile):
    func = func_decl('NS_getsolsta',
                     ('task', 'NStask_t'), ('whichsol', 'int32_t'),
                     ('isdef', 'NSbooleant *'), ('value', 'double *'), ('name', 'char *'))
    count, params = classify(func, profile, last_n_output=3)
    assert count == 3
    assert roles(params) == [
        ParamRole.RECEIVER_TASK, ParamRole.PLAIN_INPUT,
        ParamRole.BOOL_OUTPUT, ParamRole.POINTER_OUTPUT, ParamRole.STRING_OUTPUT,
    ]
    assert params[2].binding_type == 'bool'


def test_no_rule_means_no_outputs(profile):
    func = func_decl('NS_putcslice',
                     ('task', 'NStask_t'), ('first', 'int32_t'), ('last', 'int32_t'),
                     ('slice', 'const double *'))
    count, params = classify(func, profile)
    assert count == 0
    assert roles(params)[1:] == [ParamRole.PLAIN_INPUT] * 3
    assert params[3].is_pointer and params[3].is_const


def test_env_receiver(profile):
    func = func_decl('NS_checkoutlicense', ('env', 'NSenv_t'), ('feature', 'int32_t'))
    assert receiver_role(func, profile) == ParamRole.RECEIVER_ENV
    _, params = classify(func, profile)
    assert roles(params) == [ParamRole.RECEIVER_ENV, ParamRole.PLAIN_INPUT]


def test_no_receiver_without_params(profile):
    func = func_decl('NS_getversion', return_type='void')
    assert receiver_role(func, profile) is None
    assert classify(func, profile) == (0, [])


def test_output_must_be_pointer(profile):
    func = func_decl('NS_gettasknamelen', ('task', 'NStask_t'), ('len', 'int32_t'))
    with pytest.raises(SignatureError):
        classify(func, profile)


def test_output_must_not_be_const(profile):
    func = func_decl('NS_getnumcon', ('task', 'NStask_t'), ('numcon', 'const int32_t *'))
    with pytest.raises(SignatureError):
        classify(func, profile)


def test_output_count_cannot_cover_receiver(profile):
    func = func_decl('NS_putcj', ('task', 'NStask_t'), ('cj', 'double *'))
    with pytest.raises(SignatureError):
        classify(func, profile, last_n_output=2)


def test_classification_is_repeatable(profile):
    func = func_decl('NS_getnumcon', ('task', 'NStask_t'), ('numcon', 'int32_t *'))
    assert classify(func, profile) == classify(func, profile)


@pytest.mark.parametrize('action, suffix, is_task, last_type, expected', [
    ('GetMaxNum', '', True, 'int32_t *', 1),
    ('GetNum', '', False, 'int32_t *', 1),
    ('Append', 'Domain', True, 'int64_t *', 1),
    ('Append', 'Domain', False, 'int64_t *', None),
    ('Get', 'NumNz64', True, 'int64_t *', 1),
    ('Get', 'NameLen', True, 'int32_t *', 1),
    ('', 'ToStr', False, 'char *', 1),
    ('', 'ToStr', False, 'const char *', None),
    ('Put', 'Name', True, 'const char *', None),
])
def test_implied_output(action, suffix, is_task, last_type, expected):
    rule = implied_output(action, suffix, is_task, last_type)
    if expected is None:
        assert rule is None
    else:
        assert rule.count == expected
