"""HTTP layer for dgraph-admin.

:class:`RequestExecutor` sends resolved requests with :mod:`httpx` and
classifies the responses; :func:`render_outcome` prints the result.

Example::

    from dgraph_admin.client import RequestExecutor

    with RequestExecutor(config) as executor:
        outcome = executor.execute(descriptor)
"""

from dgraph_admin.client.executor import RequestExecutor, classify_response, execute, run
from dgraph_admin.client.response import render_outcome

__all__ = ["RequestExecutor", "classify_response", "execute", "run", "render_outcome"]
