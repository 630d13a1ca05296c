"""
MOSEK binding configuration

Configures the generator for the MOSEK 10 C API (mosek.h):
- MSKenv_t / MSKtask_t receivers become Env / Task methods
- MSKrescodee results become errors through the res package
- callback and variadic functions cgo cannot call directly are skipped
"""

from cgo_bindgen import ApiProfile, OverlayStore

PROFILE = ApiProfile(
    prefix='MSK',
    env_type='MSKenv_t',
    task_type='MSKtask_t',
    bool_type='MSKbooleant',
    status_type='MSKrescodee',
    status_binding='res.Code',
    status_enum='MSKrescode_enum',
    package_name='gmsk',
    include_header='mosek.h',
    default_doc_url='https://docs.mosek.com/latest/capi/alphabetic-functionalities.html',
    status_import='github.com/fardream/gmsk/res',
    string_buffer_size='C.MSK_MAX_STR_LEN+1',
)

# Take function pointers or varargs.
SKIPPED_FUNCS = (
    'MSK_echoenv',
    'MSK_echotask',
    'MSK_makeenvalloc',
    'MSK_linkfunctoenvstream',
    'MSK_linkfunctotaskstream',
    'MSK_putcallbackfunc',
    'MSK_putresponsefunc',
    'MSK_getcallbackfunc',
    'MSK_getresponsefunc',
    'MSK_putexitfunc',
    'MSK_utf8towchar',
    'MSK_wchartoutf8',
)


def configure(store: OverlayStore):
    """Apply MOSEK-specific defaults the overlay does not already set"""
    for name in SKIPPED_FUNCS:
        store.func_slot(name).skip = True

    rescode = store.enum_slot(PROFILE.status_enum)
    if not rescode.binding_name:
        rescode.binding_name = 'ResCode'
