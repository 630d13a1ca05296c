import logging

import pytest

from cgo_bindgen import ApiProfile, Header, OverlayStore

NS_PROFILE = ApiProfile(
    prefix='NS',
    env_type='NSenv_t',
    task_type='NStask_t',
    bool_type='NSbooleant',
    status_type='NSrescodee',
    status_binding='res.Code',
    status_enum='NSrescode_enum',
    package_name='nsgo',
    include_header='ns.h',
    default_doc_url='https://example.com/ns/functions.html',
    status_import='example.com/nsgo/res',
)


@pytest.fixture(autouse=True)
def _reset_logging():
    """The CLI turns off propagation, which hides records from caplog"""
    yield
    logger = logging.getLogger('cgo_bindgen')
    logger.propagate = True
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def profile() -> ApiProfile:
    return NS_PROFILE


def make_header() -> Header:
    return Header.from_dict({
        'enums': [
            {
                'name': 'NS_color_enum',
                'integer_type': 'int',
                'values': [{'name': 'RED', 'value': '0'}, {'name': 'GREEN', 'value': '1'}],
            },
            {
                'name': 'NSrescode_enum',
                'integer_type': 'int',
                'values': [
                    {'name': 'NS_RES_OK', 'value': '0'},
                    {'name': 'NS_RES_ERR_SPACE', 'value': '1051'},
                ],
            },
        ],
        'typedefs': [
            {'name': 'NScolore', 'type': 'enum NS_color_enum'},
            {'name': 'NSrescodee', 'type': 'enum NSrescode_enum'},
            {'name': 'NSint32t', 'type': 'int32_t'},
            {'name': 'NSrealt', 'type': 'double'},
        ],
        'functions': [
            {
                'name': 'NS_gettasknamelen',
                'return_type': 'NSrescodee',
                'parameters': [
                    {'name': 'task', 'type': 'NStask_t'},
                    {'name': 'size', 'type': 'NSint32t *'},
                ],
            },
            {
                'name': 'NS_putcj',
                'return_type': 'NSrescodee',
                'parameters': [
                    {'name': 'task', 'type': 'NStask_t'},
                    {'name': 'j', 'type': 'NSint32t'},
                    {'name': 'cj', 'type': 'NSrealt'},
                ],
            },
            {
                'name': 'NS_puttaskname',
                'return_type': 'NSrescodee',
                'parameters': [
                    {'name': 'task', 'type': 'NStask_t'},
                    {'name': 'taskname', 'type': 'const char *'},
                ],
            },
            {
                'name': 'NS_putcolor',
                'return_type': 'NSrescodee',
                'parameters': [
                    {'name': 'env', 'type': 'NSenv_t'},
                    {'name': 'color', 'type': 'NScolore'},
                ],
            },
        ],
    })


@pytest.fixture
def header() -> Header:
    return make_header()


@pytest.fixture
def store() -> OverlayStore:
    return OverlayStore()
