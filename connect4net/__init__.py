"""
connect4net - Networked Connect Four with a central game server

This package provides the board model, the turn dispatcher that runs a game
between the local operator, remote participants and a scripted opponent, the
TCP server and client, and the command-line front end.
"""

# Version number
__version__ = '0.1.0'
