"""
Rendering Layer
===============

Bounded Context: Text output for the list and statistics consumers.

Design:
- Stateless formatting
- The on-screen list and map themselves live outside this package
"""

from geotrace_core.rendering.formatter import SampleFormatter

__all__ = [
    "SampleFormatter",
]
