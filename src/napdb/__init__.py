"""
napdb - minimal schema-validated document store.
"""

__version__ = "0.1.0"

# Re-export the public API from the core package
from napdb.core import *  # noqa
