"""
connect4net.interfaces - Terminal interfaces for Connect Four

This package contains the server console, the operator setup CLI and the
remote participant client.
"""

# Don't import anything here to avoid circular imports
__all__ = []
