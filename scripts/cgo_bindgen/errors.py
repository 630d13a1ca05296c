"""
Error types

Everything raised here aborts a generator run. Recoverable gaps (missing
type mappings, unresolved typedefs) are logged instead and never raise.
"""


class BindgenError(Exception):
    """Base class for fatal generator errors"""


class ConfigError(BindgenError):
    """An overlay, doc table or enrichment document cannot be read"""


class ConfigurationDriftError(BindgenError):
    """The overlay names a declaration the header no longer has"""


class SignatureError(BindgenError):
    """A function's output parameters cannot be written through"""


class TypeMappingConflict(BindgenError):
    """A C type was registered twice with different binding types"""
