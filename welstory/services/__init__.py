"""
                        Services Module

Pluggable infrastructure used by the client. Each service has an abstract
base, real implementations and a mock implementation for tests.

Services:
    - transport: HTTP strategies with a process-wide fallback chain
"""

from welstory.services.transport import get_transport, reset_transport

__all__ = ["get_transport", "reset_transport"]
