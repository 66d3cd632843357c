from typing import Any  # noqa:F401
from typing import Dict  # noqa:F401
from typing import Optional  # noqa:F401

from opentelemetry import trace

from ._version import __version__
from .internal.logger import get_logger
from .internal.utils.wrappers import BaseObjectProxy


log = get_logger(__name__)


# To set attributes on wrapt proxy objects use this prefix:
# http://wrapt.readthedocs.io/en/latest/wrappers.html
_MT_PIN_NAME = "_mongotrace_pin"
_MT_PIN_PROXY_NAME = "_self_" + _MT_PIN_NAME


def _default_tracer():
    # DEV: a ProxyTracer until a TracerProvider is configured, after which it
    # delegates to the real tracer
    return trace.get_tracer("mongotrace", __version__)


class Pin(object):
    """Pin (a.k.a Patch INfo) is a small class which is used to
    set tracing metadata on a particular traced object.
    This is useful if you wanted to, say, trace two different
    database clusters with two different tracers.

        >>> server = mongodb.Server(host="localhost", port=27017)
        >>> # Override a pin for a specific server
        >>> Pin.override(server, tags={"peer.service": "user-db"})
    """

    __slots__ = ["tags", "_tracer", "_target", "_initialized"]

    def __init__(
        self,
        tags=None,  # type: Optional[Dict[str, str]]
    ):
        # type: (...) -> None
        self.tags = tags
        self._tracer = _default_tracer()
        self._target = None  # type: Optional[int]
        self._initialized = True

    def __setattr__(self, name, value):
        if getattr(self, "_initialized", False) and name not in ("_target", "_tracer"):
            raise AttributeError("can't mutate a pin, use override() or clone() instead")
        super(Pin, self).__setattr__(name, value)

    @property
    def tracer(self):
        return self._tracer

    def __repr__(self):
        return "Pin(tags=%s, tracer=%s)" % (self.tags, self.tracer)

    @staticmethod
    def get_from(obj):
        # type: (Any) -> Optional[Pin]
        """Return the pin associated with the given object. If a pin is attached to
        `obj` but the instance is not the owner of the pin, a new pin is cloned and
        attached. This ensures that a pin inherited from a class is a copy for the new
        instance, avoiding that a specific instance overrides other pins values.

            >>> pin = Pin.get_from(server)
        """
        pin_name = _MT_PIN_PROXY_NAME if isinstance(obj, BaseObjectProxy) else _MT_PIN_NAME
        pin = getattr(obj, pin_name, None)
        # detect if the PIN has been inherited from a class
        if pin is not None and pin._target != id(obj):
            pin = pin.clone()
            pin.onto(obj)
        return pin

    @classmethod
    def override(
        cls,
        obj,  # type: Any
        tags=None,  # type: Optional[Dict[str, str]]
    ):
        # type: (...) -> None
        """Override an object with the given attributes.

        That's the recommended way to customize an already instrumented driver object,
        without losing existing attributes.
        """
        Pin._override(obj, tags=tags)

    @classmethod
    def _override(
        cls,
        obj,  # type: Any
        tags=None,  # type: Optional[Dict[str, str]]
        tracer=None,
    ):
        # type: (...) -> None
        """
        Internal method that allows overriding the tracer, used in tests
        """
        if not obj:
            return

        pin = cls.get_from(obj)
        if pin is None:
            pin = Pin(tags=tags)
        else:
            pin = pin.clone(tags=tags)

        if tracer:
            pin._tracer = tracer
        pin.onto(obj)

    def onto(self, obj):
        # type: (Any) -> None
        """Patch this pin onto the given object."""
        try:
            pin_name = _MT_PIN_PROXY_NAME if isinstance(obj, BaseObjectProxy) else _MT_PIN_NAME

            # set the target reference; any get_from, clones and retarget the new PIN
            self._target = id(obj)
            return setattr(obj, pin_name, self)
        except AttributeError:
            log.debug("can't pin onto object. skipping", exc_info=True)

    def clone(
        self,
        tags=None,  # type: Optional[Dict[str, str]]
    ):
        # type: (...) -> Pin
        """Return a clone of the pin with the given attributes replaced."""
        # do a shallow copy of Pin dicts
        if not tags and self.tags:
            tags = self.tags.copy()

        pin = Pin(tags=tags)
        pin._tracer = self.tracer
        return pin
