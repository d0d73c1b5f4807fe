"""
connect4net - Connect Four played over the network against the computer

This package provides the board and win detection, a simple computer
opponent, the fixed 3-byte wire protocol with its per-connection session
state machine, a threaded TCP server and a terminal client.
"""

# Version number
__version__ = '0.1.0'
