"""Test utilities for faaspy applications::

    from faaspy.testing import TestClient
"""

from faaspy.testing.client import TestClient

__all__ = ["TestClient"]
