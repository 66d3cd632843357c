import mock
import pytest
import wrapt

from mongotrace.pin import Pin


class Obj(object):
    pass


def test_pin_onto_get_from():
    obj = Obj()
    pin = Pin(tags={"peer.service": "users"})
    pin.onto(obj)

    assert Pin.get_from(obj) is pin
    assert Pin.get_from(Obj()) is None


def test_pin_is_immutable():
    pin = Pin()
    with pytest.raises(AttributeError):
        pin.tags = {"a": "b"}


def test_pin_inherited_from_class_is_cloned():
    class Server(object):
        pass

    class_pin = Pin(tags={"a": "b"})
    class_pin.onto(Server)
    first = Server()
    second = Server()

    first_pin = Pin.get_from(first)
    assert first_pin is not class_pin
    assert first_pin.tags == {"a": "b"}
    assert first_pin.tags is not class_pin.tags
    assert Pin.get_from(first) is first_pin

    Pin.override(first, tags={"c": "d"})
    assert Pin.get_from(first).tags == {"c": "d"}
    assert Pin.get_from(second).tags == {"a": "b"}
    assert Pin.get_from(Server) is class_pin


def test_override_without_pin():
    obj = Obj()
    Pin.override(obj, tags={"a": "b"})

    assert Pin.get_from(obj).tags == {"a": "b"}


def test_override_keeps_tags():
    obj = Obj()
    Pin(tags={"a": "b"}).onto(obj)
    Pin.override(obj)

    assert Pin.get_from(obj).tags == {"a": "b"}


def test_override_none():
    # nothing to pin onto
    Pin.override(None, tags={"a": "b"})


def test_override_tracer():
    obj = Obj()
    tracer = mock.Mock()
    Pin._override(obj, tracer=tracer)

    assert Pin.get_from(obj).tracer is tracer
    assert Pin.get_from(obj).clone().tracer is tracer


def test_default_tracer():
    pin = Pin()
    assert pin.tracer is not None
    assert hasattr(pin.tracer, "start_span")


def test_onto_slots_object():
    class Slotted(object):
        __slots__ = ["a"]

    obj = Slotted()
    # no room for a pin, silently skipped
    Pin().onto(obj)
    assert Pin.get_from(obj) is None


def test_onto_proxy():
    obj = Obj()
    proxy = wrapt.ObjectProxy(obj)
    pin = Pin(tags={"a": "b"})
    pin.onto(proxy)

    assert Pin.get_from(proxy) is pin
    assert Pin.get_from(obj) is None


def test_repr():
    assert repr(Pin(tags={"a": "b"})).startswith("Pin(tags={'a': 'b'}, tracer=")


def test_onto_function_wrapper():
    def func():
        pass

    wrapper = wrapt.FunctionWrapper(func, lambda wrapped, instance, args, kwargs: wrapped(*args, **kwargs))
    pin = Pin()
    pin.onto(wrapper)

    assert Pin.get_from(wrapper) is pin
    assert getattr(func, "_mongotrace_pin", None) is None
