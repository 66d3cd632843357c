from collections import namedtuple
import importlib
import os

from mongotrace import config
from mongotrace.internal.logger import get_logger
from mongotrace.internal.utils.formats import asbool
from mongotrace.pin import Pin

from ..trace_utils import iswrapped
from ..trace_utils import unwrap as _u
from ..trace_utils import wrap as _w
from .parse import Invocation
from .parse import operation_name
from .trace import SpanCloser
from .trace import has_active_span
from .trace import set_attributes
from .trace import start_span


log = get_logger(__name__)

config._add(
    "mongodb",
    dict(
        enhanced_database_reporting=asbool(os.getenv("MONGOTRACE_MONGODB_ENHANCED_DATABASE_REPORTING", default=False)),
    ),
)

# name of the driver module patched by default
DRIVER_MODULE = "mongodb"

_PATCHED_FLAG = "_mongotrace_patch"


def _supported_versions():
    return {"mongodb": ">=2,<4"}


def _import_driver():
    return importlib.import_module(DRIVER_MODULE)


def get_version(module=None):
    # type: (...) -> str
    if module is None:
        module = _import_driver()
    return getattr(module, "__version__", "")


def _traced_server_method(method_name):
    def traced_server_method(func, instance, args, kwargs):
        invocation = Invocation(args, kwargs)
        command = invocation.command
        if not has_active_span() or not callable(invocation.handler) or command is None:
            return func(*args, **kwargs)
        pin = Pin.get_from(instance)
        if not pin:
            return func(*args, **kwargs)

        span = start_span(pin, operation_name(command, method_name))
        set_attributes(span, invocation.ns, command, instance, pin.tags)

        closer = SpanCloser(span)
        args, kwargs = invocation.replace_handler(closer.wrap(invocation.handler))
        return closer.call(func, *args, **kwargs)

    return traced_server_method


def _traced_cursor_method(method_name):
    def traced_cursor_method(func, instance, args, kwargs):
        handler = args[0] if args else None
        if not has_active_span() or not callable(handler):
            return func(*args, **kwargs)
        pin = Pin.get_from(instance)
        if not pin:
            return func(*args, **kwargs)

        span = start_span(pin, "query")
        set_attributes(
            span,
            getattr(instance, "ns", None),
            getattr(instance, "cmd", None),
            getattr(instance, "topology", None),
            pin.tags,
        )

        closer = SpanCloser(span)
        return closer.call(func, closer.wrap(handler), *args[1:], **kwargs)

    return traced_cursor_method


InterceptionTarget = namedtuple("InterceptionTarget", ["name", "methods", "wrapper"])

TARGETS = (
    InterceptionTarget("Server", ("insert", "update", "remove", "command"), _traced_server_method),
    InterceptionTarget("Cursor", ("_next", "next"), _traced_cursor_method),
)


def patch(module=None):
    """Instrument the ``Server`` and ``Cursor`` classes of the driver. Patching
    twice is a no-op. Returns the driver module.
    """
    if module is None:
        module = _import_driver()

    if getattr(module, _PATCHED_FLAG, False):
        log.debug("%s is already patched, ignoring", module.__name__)
        return module

    for target in TARGETS:
        cls = getattr(module, target.name, None)
        if cls is None:
            log.debug("%s.%s not found, skipping", module.__name__, target.name)
            continue

        Pin().onto(cls)
        for method in target.methods:
            if not hasattr(cls, method):
                log.debug("%s.%s.%s not found, skipping", module.__name__, target.name, method)
                continue
            log.debug("patching %s.%s.%s", module.__name__, target.name, method)
            _w(cls, method, target.wrapper(method))

    setattr(module, _PATCHED_FLAG, True)
    return module


def unpatch(module=None):
    """Restore the original methods of the driver.

    Raises ``AttributeError`` when the driver has no ``Server`` or ``Cursor``.
    Methods that are not wrapped are left as they are.
    """
    if module is None:
        module = _import_driver()

    for target in TARGETS:
        cls = getattr(module, target.name)
        for method in target.methods:
            if not iswrapped(cls, method):
                log.debug("%s.%s.%s is not patched, skipping", module.__name__, target.name, method)
                continue
            _u(cls, method)

    setattr(module, _PATCHED_FLAG, False)
