"""infinispan-rest -- a typed client for the Infinispan REST API.

Build a request with one of the resource modules, then run it::

    from infinispan_rest import Infinispan
    from infinispan_rest.request import caches, counters, entries

    client = Infinispan("http://localhost:11222", "username", "password")
    client.run(caches.create_local("some_cache"))
    client.run(entries.create("some_cache", "some_entry").with_value("a_value"))

    resp = client.run(entries.get("some_cache", "some_entry"))
    assert resp.status_code == 200
    assert resp.text == "a_value"

Modules:
    request: Request builders for caches, counters and entries.
    client: Blocking and async clients.
    config: Stored connection profiles and credential sources.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr diagnostics with Rich support.
    app: The ``ispn`` command line tool.
"""

__version__ = "0.1.0"

from infinispan_rest.client import AsyncInfinispan, Infinispan  # noqa: E402
from infinispan_rest.exceptions import ConnectionError_, InfinispanError  # noqa: E402

__all__ = ["AsyncInfinispan", "ConnectionError_", "Infinispan", "InfinispanError", "__version__"]
