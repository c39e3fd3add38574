"""
Engine Decorators

Contains decorators that resolve the caller's puzzle engine for HTTP and
WebSocket handlers.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit

from .helpers import get_player_id


def require_engine(f):
    """
    Decorator resolving the caller's puzzle engine for HTTP endpoints.

    The engine is passed to the view as the `engine` keyword argument.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        try:
            engine = game_service.get_engine(get_player_id(request))
        except ValueError as e:
            return jsonify({
                'success': False,
                'error': str(e)
            }), 400

        kwargs['engine'] = engine
        return f(*args, **kwargs)

    return decorated_function


def websocket_engine_required(f):
    """Decorator resolving the caller's puzzle engine for WebSocket events."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        data = args[0] if args and isinstance(args[0], dict) else {}
        try:
            engine = game_service.get_engine(data.get('player_id'))
        except ValueError as e:
            emit('error', {'error': str(e)})
            return

        kwargs['engine'] = engine
        return f(data, *args[1:], **kwargs)

    return decorated_function
