"""serf-members — list the members of a running Serf cluster.

Queries a Serf agent over its msgpack RPC channel, filters the member
snapshot by role and status, and renders the result as text.
"""

from serf_members.version import __version__

__all__: list[str] = ["__version__"]
