"""
API profile

Names the handful of C identifiers the normalizer treats specially:
the namespace prefix, the two handle types a method can be attached to,
the library's boolean and status-code types, and where generated code goes.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ApiProfile:
    """Library-specific constants for one wrapped C API"""
    prefix: str
    env_type: str
    task_type: str
    bool_type: str
    status_type: str
    status_binding: str = 'res.Code'
    status_enum: str = ''
    package_name: str = 'main'
    include_header: str = ''
    default_doc_url: str = ''
    status_import: str = ''
    string_buffer_size: str = '1024'
    extra_types: dict[str, str] = field(default_factory=dict)

    @property
    def bool_pointer_type(self) -> str:
        return f'{self.bool_type} *'

