from typing import Union  # noqa:F401


VALUE_PLACEHOLDER = "?"


def asbool(value):
    # type: (Union[str, bool, None]) -> bool
    """Convert an environment value such as ``MONGOTRACE_TRACE_DEBUG`` to a boolean.

    Only ``true`` (any case) and ``1`` are truthy; unset is ``False``.
    """
    if value is None:
        return False

    if isinstance(value, bool):
        return value

    return value.lower() in ("true", "1")
