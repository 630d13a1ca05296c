import json

import pytest

from cgo_bindgen import ConfigError, EnumValue, Header, ParamDecl


def test_load(tmp_path):
    path = tmp_path / 'header.json'
    path.write_text(json.dumps({
        'enums': [{'name': 'NS_color_enum', 'values': [{'name': 'RED', 'value': 0}]}],
        'functions': [{'name': 'NS_optimize',
                       'parameters': [{'name': 'task', 'type': 'NStask_t'}]}],
    }), encoding='utf-8')
    header = Header.load(path)

    enum = header.get_enum('NS_color_enum')
    assert enum.integer_type == 'int'
    assert enum.values == (EnumValue('RED', '0'),)
    assert header.get_enum('NS_gone_enum') is None
    assert header.typedefs == []
    assert header.functions[0].params == (ParamDecl('task', 'NStask_t'),)
    assert header.functions[0].return_type == 'void'


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        Header.load(tmp_path / 'nope.json')


def test_load_invalid_json(tmp_path):
    path = tmp_path / 'header.json'
    path.write_text('{"enums": [', encoding='utf-8')
    with pytest.raises(ConfigError):
        Header.load(path)


@pytest.mark.parametrize('data', [
    [],
    {'functions': [{'return_type': 'void'}]},
    {'typedefs': [{'name': 'NSint32t'}]},
    {'enums': [{'name': 'NS_color_enum', 'values': [{'name': 'RED'}]}]},
    {'functions': ['NS_optimize']},
])
def test_from_dict_malformed(data):
    with pytest.raises(ConfigError):
        Header.from_dict(data)
