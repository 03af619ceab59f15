"""Utility functions and helpers.

``spinfield.utils.io`` and ``spinfield.utils.performance`` depend on the core
package and are imported explicitly.
"""

from .random import generate_random_unit_vectors

__all__ = [
    "generate_random_unit_vectors",
]
