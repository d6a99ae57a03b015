"""Dependency health-check runner.

Verifies that configured dependencies (a timestamp file, a message broker,
a relational database, a key-value store, HTTP endpoints) are reachable and
minimally functional, then reports one aggregate verdict as an exit status.
"""

__version__ = "0.1.0"
