import pytest
import wrapt

from mongotrace.internal.utils.wrappers import BaseObjectProxy
from mongotrace.internal.utils.wrappers import NotWrappedError
from mongotrace.internal.utils.wrappers import iswrapped
from mongotrace.internal.utils.wrappers import unwrap


class Target(object):
    def method(self):
        return "original"


def _wrapper(wrapped, instance, args, kwargs):
    return "wrapped " + wrapped(*args, **kwargs)


def test_wrap_unwrap():
    original = Target.__dict__["method"]
    wrapt.wrap_function_wrapper(Target, "method", _wrapper)
    try:
        assert iswrapped(Target, "method")
        assert Target().method() == "wrapped original"
    finally:
        unwrap(Target, "method")

    assert not iswrapped(Target, "method")
    assert Target.__dict__["method"] is original
    assert Target().method() == "original"


def test_unwrap_not_wrapped():
    with pytest.raises(NotWrappedError):
        unwrap(Target, "method")


def test_unwrap_missing_attribute():
    with pytest.raises(NotWrappedError):
        unwrap(Target, "missing")


def test_iswrapped():
    assert not iswrapped(Target.method)
    assert not iswrapped(Target, "missing")
    assert iswrapped(wrapt.FunctionWrapper(Target.method, _wrapper))
    assert iswrapped(wrapt.ObjectProxy(Target.method))


def test_proxy_base_covers_function_wrappers():
    wrapper = wrapt.FunctionWrapper(Target.method, _wrapper)

    assert isinstance(wrapper, BaseObjectProxy)
    assert isinstance(wrapt.ObjectProxy(Target()), BaseObjectProxy)


def test_iswrapped_class_attribute():
    class Other(object):
        def method(self):
            return "original"

    wrapt.wrap_function_wrapper(Other, "method", _wrapper)

    assert iswrapped(Other, "method")
    assert iswrapped(Other.__dict__["method"])
    assert iswrapped(Other(), "method")
