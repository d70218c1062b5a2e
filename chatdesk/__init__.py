"""
chatdesk: admin/user direct messaging service.

Core package: records, the in-memory data store, sessions, configuration
and logging. The HTTP layer lives in ``chatdesk_web``.
"""

__version__ = "1.0.0"
