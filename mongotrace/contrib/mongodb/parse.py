from collections.abc import Mapping
import enum
import json
from typing import Any  # noqa:F401
from typing import Optional  # noqa:F401
from typing import Tuple  # noqa:F401

from ...internal.utils import get_argument_value
from ...internal.utils import set_argument_value
from ...internal.utils.formats import VALUE_PLACEHOLDER


class CommandType(str, enum.Enum):
    CREATE_INDEXES = "createIndexes"
    FIND_AND_MODIFY = "findAndModify"
    IS_MASTER = "isMaster"
    COUNT = "count"
    UNKNOWN = "unknown"


# first match wins
_COMMAND_TYPE_KEYS = (
    ("createIndexes", CommandType.CREATE_INDEXES),
    ("findandmodify", CommandType.FIND_AND_MODIFY),
    ("ismaster", CommandType.IS_MASTER),
    ("count", CommandType.COUNT),
)


def get_command_type(command):
    # type: (Mapping) -> CommandType
    """Return the type of a driver internal command, probing the presence of its distinguishing keys."""
    for key, command_type in _COMMAND_TYPE_KEYS:
        if key in command:
            return command_type
    return CommandType.UNKNOWN


def operation_name(command, method_name):
    # type: (Mapping, str) -> str
    """Return the operation reported for ``command``, the wrapped method name when the type is unknown."""
    command_type = get_command_type(command)
    if command_type is CommandType.UNKNOWN:
        return method_name
    return command_type.value


class Invocation(object):
    """A call to one of ``Server``'s dispatch methods.

    The driver accepts ``(ns, cmds, options=None, callback=None)`` where the
    options may be left out, the completion callback then taking their place.
    """

    __slots__ = ["args", "kwargs", "ns", "cmds", "handler", "_handler_pos", "_handler_kw"]

    def __init__(self, args, kwargs):
        self.args = tuple(args)
        self.kwargs = kwargs
        self.ns = get_argument_value(args, kwargs, 0, "ns", optional=True)
        self.cmds = get_argument_value(args, kwargs, 1, "cmds", optional=True)

        options = get_argument_value(args, kwargs, 2, "options", optional=True)
        if callable(options):
            self.handler = options
            self._handler_pos, self._handler_kw = 2, "options"
        else:
            self.handler = get_argument_value(args, kwargs, 3, "callback", optional=True)
            self._handler_pos, self._handler_kw = 3, "callback"

    @property
    def command(self):
        # type: () -> Optional[Mapping]
        """The command to report on: the first one of a batch. ``None`` when it is not a mapping."""
        cmds = self.cmds
        if isinstance(cmds, (list, tuple)):
            cmds = cmds[0] if cmds else None
        if isinstance(cmds, Mapping):
            return cmds
        return None

    def replace_handler(self, handler):
        # type: (Any) -> Tuple[Tuple[Any, ...], dict]
        """Return the call's ``args, kwargs`` with the completion handler replaced."""
        return set_argument_value(self.args, self.kwargs, self._handler_pos, self._handler_kw, handler)


def split_namespace(ns):
    # type: (Any) -> Tuple[Optional[str], Optional[str]]
    """Return a ``(db, collection)`` tuple from the ``"db.collection"`` namespace.

    The namespace may be any object, it is coerced to a string. A namespace
    without separator has no collection.
    """
    if ns is None:
        return None, None
    if isinstance(ns, bytes):
        ns = ns.decode("utf-8", errors="replace")
    db, sep, collection = str(ns).partition(".")
    return db, (collection if sep else None)


def _field(obj, name):
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def get_address(topology):
    # type: (Any) -> Optional[Tuple[Any, Any]]
    """Return the ``(host, port)`` the topology targets, ``None`` when it exposes no internal settings.

    The options level settings are preferred over the legacy top level ones.
    """
    state = getattr(topology, "s", None)
    if state is None:
        return None
    options = _field(state, "options")
    host = _field(options, "host")
    if host is None:
        host = _field(state, "host")
    port = _field(options, "port")
    if port is None:
        port = _field(state, "port")
    return host, port


def get_query(command):
    # type: (Any) -> Any
    if isinstance(command, Mapping):
        for key in ("query", "q"):
            query = command.get(key)
            if query is not None:
                return query
    return command


def format_statement(query, enhanced=False):
    # type: (Any, bool) -> str
    """Serialize ``query`` to JSON. Unless ``enhanced``, every value is replaced
    with a placeholder and only the keys are kept.
    """
    if not enhanced:
        if isinstance(query, Mapping):
            query = {str(key): VALUE_PLACEHOLDER for key in query}
        else:
            query = VALUE_PLACEHOLDER
    # compact separators, non-ASCII text kept as is
    return json.dumps(query, default=str, separators=(",", ":"), ensure_ascii=False)
