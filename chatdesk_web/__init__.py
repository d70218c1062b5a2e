"""
HTTP layer for chatdesk.

Build the app with ``chatdesk_web.main.create_app``; routers are not
mounted on import.
"""
