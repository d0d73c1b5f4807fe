#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four network game
"""

import argparse

from connect4net.debug import debug, DebugLevel
from connect4net.utils import DEFAULT_HOST, DEFAULT_PORT

# --- Utility Functions ---

def configure_debug(args):
    """Configure logging from args.debug, args.debug_level and args.log_file."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.configure(level=DebugLevel[args.debug_level.upper()])

    if getattr(args, 'log_file', None):
        debug.configure(log_file=args.log_file)

# --- Command Handlers ---

def handle_server_command(args):
    """Handle the 'server' component."""
    from connect4net.interfaces.server import serve

    configure_debug(args)
    serve(args.host, args.port)

def handle_client_command(args):
    """Handle the 'client' component."""
    from connect4net.interfaces.client import run_client

    configure_debug(args)
    run_client(args.server, args.port, delay=args.delay)

def add_debug_arguments(parser, default_level):
    parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default=default_level,
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    parser.add_argument('--log_file',
        type=str,
        help='Also write log records to this file')

def main():
    parser = argparse.ArgumentParser(
        description='Connect Four over the network: a human client against a computer server',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py server --port 50000
  python run.py client 192.168.1.10
    """
    )

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    server_parser = subparsers.add_parser('server',
        help='Host the computer opponent',
        description='Accept client connections and play one game session per connection')
    server_parser.add_argument('--host',
        type=str,
        default=DEFAULT_HOST,
        help='Interface to listen on (default: all)')
    server_parser.add_argument('--port',
        type=int,
        default=DEFAULT_PORT,
        help=f'TCP port to listen on (default: {DEFAULT_PORT})')
    add_debug_arguments(server_parser, 'info')

    client_parser = subparsers.add_parser('client',
        help='Play against a server',
        description='Connect to a server and play interactively in the terminal')
    client_parser.add_argument('server',
        help='Server name or IP address')
    client_parser.add_argument('--port',
        type=int,
        default=DEFAULT_PORT,
        help=f'Server TCP port (default: {DEFAULT_PORT})')
    client_parser.add_argument('--delay',
        type=float,
        default=1.0,
        help='Pause before showing the computer move, in seconds (default: 1.0)')
    add_debug_arguments(client_parser, 'error')

    args = parser.parse_args()
    if args.component == 'server':
        handle_server_command(args)
    elif args.component == 'client':
        handle_client_command(args)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
