"""
Plan store: a JSON document service with schema validation and ETag-based conditional reads.
"""

from .core.config import VERSION

__version__ = VERSION
