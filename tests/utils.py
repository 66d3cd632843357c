import contextlib
import os

import mongotrace


@contextlib.contextmanager
def override_env(env):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with override_env(dict(MONGOTRACE_TRACE_DEBUG="true")):
            # Your test
    """
    # Copy the full original environment
    original = dict(os.environ)

    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)


@contextlib.contextmanager
def override_config(integration, values):
    """
    Temporarily override an integration configuration value::

        >>> with override_config('mongodb', dict(enhanced_database_reporting=True)):
            # Your test
    """
    options = getattr(mongotrace.config, integration)

    original = dict((key, options.get(key)) for key in values.keys())

    options.update(values)
    try:
        yield
    finally:
        options.update(original)
