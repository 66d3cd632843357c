"""
Importing ``mongotrace.auto`` installs the instrumentation of every supported
driver. It should be imported as early as possible, before the drivers are::

    # myapp.py

    import mongotrace.auto  # install instrumentation as early as possible
    import mongodb

Set ``MONGOTRACE_TRACE_<INTEGRATION>_ENABLED=false`` to leave an integration out.
"""
from mongotrace import patch_all


patch_all()
