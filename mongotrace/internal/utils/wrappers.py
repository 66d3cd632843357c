from typing import Any  # noqa:F401
from typing import Optional  # noqa:F401

import wrapt


# wrapt 2 splits ObjectProxy out of the base class FunctionWrapper derives from
BaseObjectProxy = getattr(wrapt, "BaseObjectProxy", wrapt.ObjectProxy)


class NotWrappedError(Exception):
    pass


def iswrapped(obj, attr=None):
    # type: (Any, Optional[str]) -> bool
    """Returns whether an attribute is wrapped or not."""
    if attr is not None:
        obj = getattr(obj, attr, None)
    return hasattr(obj, "__wrapped__") and isinstance(obj, BaseObjectProxy)


def unwrap(obj, attr):
    # type: (Any, str) -> None
    """Restore the original implementation of ``obj.attr``.

    The lookup of ``obj`` itself is left to the caller: a missing target
    surfaces as the caller's ``AttributeError``.
    """
    try:
        wrapped = getattr(obj, attr).__wrapped__
    except AttributeError:
        raise NotWrappedError("{}.{} is not wrapped".format(obj, attr))
    setattr(obj, attr, wrapped)
