from typing import Any  # noqa:F401
from typing import Callable  # noqa:F401
from typing import Dict  # noqa:F401
from typing import Optional  # noqa:F401

from opentelemetry import trace
from opentelemetry.trace import Span  # noqa:F401
from opentelemetry.trace import SpanKind
from opentelemetry.trace import Status
from opentelemetry.trace import StatusCode

from mongotrace import config
from mongotrace.ext import db
from mongotrace.ext import mongo as mongox
from mongotrace.ext import net
from mongotrace.internal.logger import get_logger

from .parse import format_statement
from .parse import get_address
from .parse import get_query
from .parse import split_namespace


log = get_logger(__name__)


def has_active_span():
    # type: () -> bool
    return trace.get_current_span().get_span_context().is_valid


def start_span(pin, operation):
    # type: (Any, str) -> Span
    return pin.tracer.start_span("%s.%s" % (mongox.SERVICE, operation), kind=SpanKind.CLIENT)


def set_attributes(span, ns, command, topology, tags=None):
    # type: (Span, Any, Any, Any, Optional[Dict[str, str]]) -> None
    """Describe the operation on ``span``: the server it targets, the
    database and collection of ``ns`` and, when a command is given, its statement.
    """
    attributes = dict(tags or {})

    address = get_address(topology)
    if address is not None:
        host, port = address
        if host is not None:
            attributes[net.HOST_NAME] = str(host)
        if port is not None:
            attributes[net.HOST_PORT] = str(port)

    db_name, collection = split_namespace(ns)
    attributes[db.SYSTEM] = mongox.SERVICE
    if db_name is not None:
        attributes[db.NAME] = db_name
    if collection is not None:
        attributes[mongox.COLLECTION] = collection

    if command is not None:
        try:
            attributes[db.STATEMENT] = format_statement(
                get_query(command), enhanced=config.mongodb.enhanced_database_reporting
            )
        except (TypeError, ValueError):
            log.debug("unable to serialize the statement of %r", ns, exc_info=True)

    span.set_attributes(attributes)


class SpanCloser(object):
    """Ends a span exactly once, either from the completion callback of the
    traced call or when the call itself raises.
    """

    __slots__ = ["span", "closed"]

    def __init__(self, span):
        # type: (Span) -> None
        self.span = span
        self.closed = False

    def close(self, error=None):
        # type: (Optional[BaseException]) -> None
        if self.closed:
            return
        self.closed = True
        if error is not None:
            self.span.set_status(Status(StatusCode.ERROR, str(error)))
        self.span.end()

    def wrap(self, handler):
        # type: (Callable[..., Any]) -> Callable[..., Any]
        """Return a callback ending the span before handing every argument over to ``handler``."""
        closer = self

        def traced_handler(*args, **kwargs):
            error = args[0] if args else None
            closer.close(error if isinstance(error, BaseException) else None)
            return handler(*args, **kwargs)

        return traced_handler

    def call(self, func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BaseException as e:
            self.close(e)
            raise
