#!/usr/bin/env python3
"""
run.py - Main entry point for the networked Connect Four game
"""

import argparse
import sys

from connect4net.debug import debug, DebugLevel
from connect4net.errors import Connect4Error, SetupError, TransportError
from connect4net.game.dispatcher import OutcomeKind
from connect4net.interfaces.cli import ServerCLI
from connect4net.interfaces.client import RemoteClient
from connect4net.utils import (DEFAULT_CLIENT_HOST, DEFAULT_HOST, DEFAULT_PORT, GameMode)

# --- Utility Functions ---

def configure_debug(args):
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.configure(level=DebugLevel[args.debug_level.upper()])
    if args.log_file:
        debug.configure(log_file=args.log_file)

def parse_mode(value):
    """argparse type for --mode."""
    try:
        return GameMode.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))

# --- Command Handlers ---

def handle_server(args):
    """Handle the 'server' command: set up a game and run it to the end."""
    configure_debug(args)
    if (args.rows is None) != (args.columns is None):
        print("Error: --rows and --columns must be given together")
        return 2

    cli = ServerCLI(host=args.host, port=args.port, seed=args.seed)
    try:
        outcome = cli.run(rows=args.rows, columns=args.columns, mode=args.mode)
    except SetupError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nServer interrupted.")
        return 130

    if outcome.kind == OutcomeKind.ABORTED:
        return 1
    return 0

def handle_client(args):
    """Handle the 'client' command: join a running server."""
    configure_debug(args)
    try:
        client = RemoteClient.connect(args.host, args.port)
    except TransportError as e:
        print(e)
        return 1

    try:
        client.run()
    except KeyboardInterrupt:
        print("\nDisconnected.")
    return 0

# --- Main Entry Point ---

def main():
    """Main entry point for the networked Connect Four game."""
    parser = argparse.ArgumentParser(
        description='Networked Connect Four',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    SERVER:
    -------
    # Choose board size and mode interactively, listen on port 8000
    python run.py server

    # Standard 6x7 board, two remote players
    python run.py server --rows 6 --columns 7 --mode client-vs-client

    # Play against the computer at the server console (no networking)
    python run.py server --rows 6 --columns 7 --mode server-vs-computer

    # Reproducible computer opponent with verbose logging to a file
    python run.py server --mode client-vs-computer --seed 42 --debug_level debug --log_file server.log

    CLIENT:
    -------
    # Join a server on this machine
    python run.py client

    # Join a server elsewhere
    python run.py client --host 192.168.1.20 --port 8000
    """
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    common.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='warning',
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    common.add_argument('--log_file',
        type=str,
        help='Also write log records to this file')

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    server_parser = subparsers.add_parser('server',
        parents=[common],
        help='Host a game',
        description='Set up a board and game mode, accept players and run the game')
    server_parser.add_argument('--host',
        default=DEFAULT_HOST,
        help=f'Address to listen on (default: {DEFAULT_HOST})')
    server_parser.add_argument('--port',
        type=int,
        default=DEFAULT_PORT,
        help=f'Port to listen on (default: {DEFAULT_PORT})')
    server_parser.add_argument('--rows',
        type=int,
        help='Number of board rows (4-20); asked interactively when omitted')
    server_parser.add_argument('--columns',
        type=int,
        help='Number of board columns (4-20); asked interactively when omitted')
    server_parser.add_argument('--mode',
        type=parse_mode,
        help='Game mode: ' + ', '.join(mode.value for mode in GameMode))
    server_parser.add_argument('--seed',
        type=int,
        help='Seed for the computer opponent')

    client_parser = subparsers.add_parser('client',
        parents=[common],
        help='Join a game',
        description='Connect to a server and play as a remote participant')
    client_parser.add_argument('--host',
        default=DEFAULT_CLIENT_HOST,
        help=f'Server address (default: {DEFAULT_CLIENT_HOST})')
    client_parser.add_argument('--port',
        type=int,
        default=DEFAULT_PORT,
        help=f'Server port (default: {DEFAULT_PORT})')

    args = parser.parse_args()
    try:
        if args.component == 'server':
            return handle_server(args)
        elif args.component == 'client':
            return handle_client(args)
    except Connect4Error as e:
        debug.error(f"Unhandled error: {e}")
        print(f"Error: {e}")
        return 1

    parser.print_help()
    return 0

if __name__ == "__main__":
    sys.exit(main())
