"""Two-party share conversion protocols.

- ``e2f``: EC point addition to additive shares of the sum's x-coordinate.
- ``ghash``: GHASH polynomial hashing under an additively shared key.

Both are built on the ideal OLE functionality in ``func.ole``.
"""

__version__ = "0.1.0"
