"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_engine, websocket_engine_required
from .helpers import get_player_id
from .game_logger import game_logger

__all__ = ['require_engine', 'websocket_engine_required', 'get_player_id', 'game_logger']
