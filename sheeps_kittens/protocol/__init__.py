"""
Text Protocol Interface

This module implements a line-based engine protocol modelled on UCI, which
lets a front-end drive the game and the computer opponent over
stdin/stdout.

Protocol Flow:
    Front-end → "skp"
    Engine → "id name SheepsKittens 0.1.0"
    Engine → "skpok"
    Front-end → "position startpos moves 22"
    Front-end → "go difficulty easy"
    Engine → "info depth 2 score 24 nodes 132 time 3"
    Engine → "bestmove 00-01"
"""

from sheeps_kittens.protocol.interface import ProtocolEngine, setup_logger

__all__ = ['ProtocolEngine', 'setup_logger']
