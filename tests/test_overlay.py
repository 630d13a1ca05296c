import pytest
import yaml

from cgo_bindgen import ConfigError
from cgo_bindgen.overlay import (
    EnrichmentConst, EnrichmentEnum, EnrichmentFunc, Enrichment, EnumOverlay, FuncOverlay,
    OverlayStore, clean_comment, enrichment_from_data, load_doc_table, load_enrichment,
    load_overlay, normalize_value, overlay_from_dict,
)

OVERLAY_DOC = {
    'enums': {
        'NS_color_enum': {
            'go_name': 'Colour',
            'constant_comments': {'RED': 'warm'},
            'is_equal_type': True,
        },
    },
    'funcs': {
        'NS_gettasknamelen': {'go_name': 'TaskNameLength', 'comment': 'length of the name'},
        'NS_putcj': {'skip': True},
        'NS_getsolution': {'last_n_param_output': 3, 'is_deprecated': True},
    },
    'type_to_go_type': {'NSuserhandle_t': 'unsafe.Pointer'},
}


def test_overlay_from_dict():
    store = overlay_from_dict(OVERLAY_DOC)
    assert store.enums['NS_color_enum'] == EnumOverlay(
        binding_name='Colour', constant_comments={'RED': 'warm'}, is_equal_type=True)
    assert store.funcs['NS_gettasknamelen'].binding_name == 'TaskNameLength'
    assert store.funcs['NS_gettasknamelen'].comment == 'length of the name'
    assert store.funcs['NS_putcj'].skip
    assert store.funcs['NS_getsolution'] == FuncOverlay(last_n_output=3, deprecated=True)
    assert store.types == {'NSuserhandle_t': 'unsafe.Pointer'}


def test_to_dict_uses_document_keys():
    store = overlay_from_dict(OVERLAY_DOC)
    assert store.to_dict() == OVERLAY_DOC


def test_empty_document():
    store = overlay_from_dict(None)
    assert store.funcs == {} and store.enums == {} and store.types == {}


def test_slots_are_created_once():
    store = OverlayStore()
    slot = store.func_slot('NS_foo')
    slot.binding_name = 'Foo'
    assert store.func_slot('NS_foo') is slot
    assert store.enum_slot('NS_e') is store.enum_slot('NS_e')


def test_load_overlay_and_dump(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text(yaml.safe_dump(OVERLAY_DOC), encoding='utf-8')
    store = load_overlay(path)

    out = tmp_path / 'out.yml'
    store.dump(out)
    assert yaml.safe_load(out.read_text(encoding='utf-8')) == OVERLAY_DOC


def test_load_overlay_malformed(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text('funcs: [1, 2\n', encoding='utf-8')
    with pytest.raises(ConfigError):
        load_overlay(path)


def test_load_overlay_wrong_shape(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text('funcs:\n  - NS_foo\n', encoding='utf-8')
    with pytest.raises(ConfigError):
        load_overlay(path)


def test_load_overlay_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_overlay(tmp_path / 'missing.yml')


def test_load_doc_table(tmp_path):
    urls = tmp_path / 'urls.yml'
    urls.write_text('NS_putcj: https://example.com/ns/putcj.html\n', encoding='utf-8')
    deprecated = tmp_path / 'deprecated.yml'
    deprecated.write_text('NS_putcj: {}\nNS_getsolution: {}\n', encoding='utf-8')

    table = load_doc_table(urls, deprecated)
    assert table.urls == {'NS_putcj': 'https://example.com/ns/putcj.html'}
    assert table.deprecated == {'NS_putcj', 'NS_getsolution'}


def test_load_doc_table_deprecated_list(tmp_path):
    deprecated = tmp_path / 'deprecated.yml'
    deprecated.write_text('- NS_putcj\n', encoding='utf-8')
    assert load_doc_table(None, deprecated).deprecated == {'NS_putcj'}


def test_load_doc_table_rejects_scalar(tmp_path):
    deprecated = tmp_path / 'deprecated.yml'
    deprecated.write_text('just text\n', encoding='utf-8')
    with pytest.raises(ConfigError):
        load_doc_table(None, deprecated)


def test_find_func_by_mangled_name():
    enrichment = Enrichment(funcs=[
        EnrichmentFunc('put_c_j'),
        EnrichmentFunc('get_task_name_len', comment='Obtains the length of the task name.'),
    ])
    found = enrichment.find_func('NS_gettasknamelen', 'NS')
    assert found is not None and found.name == 'get_task_name_len'
    assert enrichment.find_func('NS_optimize', 'NS') is None


@pytest.mark.parametrize('name', ['Color', 'color', 'COLOR'])
def test_find_enum_ignores_case(name):
    enrichment = Enrichment(enums=[EnrichmentEnum(name)])
    assert enrichment.find_enum('NS_color_enum', 'NS') is not None


def test_comments_by_value():
    enum = EnrichmentEnum('Flags', consts=(
        EnrichmentConst('Low', '0x10', 'low bit'),
        EnrichmentConst('Alias', '16', 'ignored, value already seen'),
        EnrichmentConst('High', '32'),
    ))
    assert enum.comments_by_value() == {'16': 'low bit'}


@pytest.mark.parametrize('value, expected', [
    ('0x10', '16'), ('16', '16'), (' 3 ', '3'), ('-1', '-1'), ('NS_OTHER', 'NS_OTHER'),
])
def test_normalize_value(value, expected):
    assert normalize_value(value) == expected


def test_enrichment_from_data_enum_mapping():
    enrichment = enrichment_from_data(
        [{'name': 'put_c_j', 'comment': 'Modifies one linear coefficient.'}],
        {'Color': {'name': 'Color', 'enum_consts': [{'name': 'Warm', 'value': 0, 'comment': 'warm'}]}},
    )
    assert enrichment.funcs[0].comment == 'Modifies one linear coefficient.'
    enum = enrichment.find_enum('NS_color_enum', 'NS')
    assert enum.consts == (EnrichmentConst('Warm', '0', 'warm'),)


def test_enrichment_from_data_rejects_scalars():
    with pytest.raises(ConfigError):
        enrichment_from_data(['put_c_j'], None)


def test_load_enrichment(tmp_path):
    funcs = tmp_path / 'funcs.yml'
    funcs.write_text('- name: put_c_j\n  struct_name: Task\n', encoding='utf-8')
    enums = tmp_path / 'enums.yml'
    enums.write_text('- name: Color\n  comment: Colors\n', encoding='utf-8')
    enrichment = load_enrichment(funcs, enums)
    assert enrichment.funcs == [EnrichmentFunc('put_c_j', struct_name='Task')]
    assert enrichment.enums == [EnrichmentEnum('Color', comment='Colors')]


def test_clean_comment():
    text = '\n'.join([
        'Obtains the length of the task name.',
        '',
        '# Arguments',
        '',
        '- `len_` Returns the length.',
        '',
        'Full documentation: https://example.com',
        '',
        'See [get_task_name]',
    ])
    assert clean_comment(text) == '\n'.join([
        'Obtains the length of the task name.',
        '',
        '',
        'Arguments:',
        '',
        '  - `len` Returns the length.',
    ])


@pytest.mark.parametrize('count', ['three', -1, [1], True])
def test_output_count_must_be_non_negative_integer(count):
    with pytest.raises(ConfigError):
        overlay_from_dict({'funcs': {'NS_putcj': {'last_n_param_output': count}}})


def test_output_count_from_text():
    store = overlay_from_dict({'funcs': {'NS_getsolution': {'last_n_param_output': '2'}}})
    assert store.funcs['NS_getsolution'].last_n_output == 2


def test_enrichment_enum_constants_must_be_mappings():
    with pytest.raises(ConfigError):
        enrichment_from_data(None, [{'name': 'Color', 'enum_consts': ['RED']}])


def test_find_func_first_record_wins():
    first = EnrichmentFunc('put_c_j', comment='first')
    enrichment = Enrichment(funcs=[first, EnrichmentFunc('putc_j', comment='second')])
    assert enrichment.find_func('NS_putcj', 'NS') is first
    assert enrichment.find_func('OTHER_putcj', 'NS') is None
