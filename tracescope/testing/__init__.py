"""
Testing Infrastructure - Test Support Utilities.

    - Fakes: in-memory request handles for driving the tracker in tests
"""

from .fakes import FakeRequest

__all__ = ["FakeRequest"]
