"""Instrument a callback based MongoDB driver to report database operations
as OpenTelemetry spans.

The integration wraps the driver internal ``Server.insert``, ``Server.update``,
``Server.remove`` and ``Server.command`` dispatch methods, as well as the
``Cursor._next`` and ``Cursor.next`` iteration methods. A ``CLIENT`` span is
started for each call made while a span is active, and ended when the driver
invokes the completion callback of the call. Calls made outside of a trace, or
without a completion callback, are left untouched.

::

    import mongotrace
    import mongodb

    # patch the driver as soon as it is imported
    mongotrace.patch(mongodb=True)

    # or patch it explicitly
    from mongotrace.contrib.mongodb import patch
    patch(mongodb)


Global Configuration
~~~~~~~~~~~~~~~~~~~~

.. py:data:: mongotrace.config.mongodb["enhanced_database_reporting"]

   Report the query of each operation verbatim in the ``db.statement``
   attribute. When disabled, only the keys of the query are reported and every
   value is replaced with ``?``.

   This option can also be set with the ``MONGOTRACE_MONGODB_ENHANCED_DATABASE_REPORTING``
   environment variable.

   Default: ``False``
"""
from .patch import get_version
from .patch import patch
from .patch import unpatch


__all__ = ["patch", "unpatch", "get_version"]
