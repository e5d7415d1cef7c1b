"""
connect4net.net - Networking for Connect Four

This package contains the wire protocol messages, the line-oriented
transports and the listening server.
"""

# Don't import the server here, it depends on connect4net.game
__all__ = []
