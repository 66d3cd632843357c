"""
This module contains utility functions for writing mongotrace integrations.
"""
from typing import Any  # noqa:F401
from typing import Callable  # noqa:F401

import wrapt

from mongotrace.internal.utils.wrappers import iswrapped  # noqa: F401
from mongotrace.internal.utils.wrappers import unwrap  # noqa: F401


def wrap(mod, name, wrapper):
    # type: (Any, str, Callable[..., Any]) -> None
    """Wrap ``mod.name`` with ``wrapper``, a ``(wrapped, instance, args, kwargs)`` callable.

    ``mod`` may be a module, a class or a dotted module path.
    """
    wrapt.wrap_function_wrapper(mod, name, wrapper)
