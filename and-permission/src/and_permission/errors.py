from __future__ import annotations


class AndPermissionError(RuntimeError):
    """Base class for errors raised by and_permission."""


class HostNotAttachedError(AndPermissionError):
    """Raised when a fragment-backed source has no attached host.

    This is a caller lifecycle bug (querying from a detached fragment) and is
    never masked by the evaluator.
    """


class PermissionQueryError(AndPermissionError):
    """Raised when a host cannot answer a grant/rationale query."""


class ConfigValidationError(AndPermissionError):
    """Raised when a config file is not an object or fails schema validation."""


class EmptyPermissionsError(ValueError):
    """Raised for empty permission names, groups, or group lists.

    Both `True` (vacuous AND) and `False` (vacuous OR) are plausible answers
    for an empty input, so none is picked.
    """
