import pytest

from mongotrace.contrib.mongodb import patch
from mongotrace.contrib.mongodb import unpatch
from mongotrace.pin import Pin
from tests.contrib.mongodb import driver as mongodb_driver
from tests.utils import override_config


@pytest.fixture
def driver(tracer):
    patch(mongodb_driver)
    Pin._override(mongodb_driver.Server, tracer=tracer)
    Pin._override(mongodb_driver.Cursor, tracer=tracer)
    yield mongodb_driver
    unpatch(mongodb_driver)


@pytest.fixture
def enhanced_reporting():
    with override_config("mongodb", dict(enhanced_database_reporting=True)):
        yield


class Recorder(object):
    """A completion callback keeping every call it receives."""

    def __init__(self, exporter=None):
        self.calls = []
        self.finished_spans_seen = []
        self._exporter = exporter

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self._exporter is not None:
            self.finished_spans_seen.append(len(self._exporter.get_finished_spans()))
        return "handled"


@pytest.fixture
def callback(span_exporter):
    return Recorder(span_exporter)
