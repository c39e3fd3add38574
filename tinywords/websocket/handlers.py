"""
WebSocket Event Handlers

Handles round events over Socket.IO for clients that keep a live connection.
"""

from flask_socketio import emit
from ..config import WORD_LENGTHS
from ..services.game_service import NoActiveRoundError, StaleLoadError
from ..services.round_service import RoundStateError
from ..services.word_source import WordSourceError
from ..utils.decorators import websocket_engine_required
from ..utils.game_logger import game_logger

EXPECTED_ERRORS = (NoActiveRoundError, StaleLoadError, RoundStateError, WordSourceError, ValueError)


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('start_round')
    @websocket_engine_required
    def handle_start_round(data=None, engine=None):
        """Start a new round."""
        data = data or {}
        try:
            length = int(data.get('length', 5))
            if length not in WORD_LENGTHS:
                raise ValueError(f"Word length must be one of {', '.join(str(n) for n in WORD_LENGTHS)}")
            state = engine.start_round(length, data.get('pack_id') or None, data.get('pack_name'))
        except EXPECTED_ERRORS as e:
            emit('error', {'error': str(e)})
            return
        except Exception as e:
            game_logger.logger.error(f"Error starting round for {engine.player_id}: {e}")
            emit('error', {'error': 'Failed to start round'})
            return

        emit('round_state', {'player_id': engine.player_id, 'state': state.to_dict()})

    @socketio.on('submit_guess')
    @websocket_engine_required
    def handle_submit_guess(data=None, engine=None):
        """Submit a guess."""
        data = data or {}
        guess = data.get('guess')
        if not isinstance(guess, str):
            emit('error', {'error': 'Guess is required'})
            return

        try:
            outcome = engine.submit_guess(guess)
        except EXPECTED_ERRORS as e:
            emit('error', {'error': str(e)})
            return

        emit('guess_result', outcome.to_dict())

    @socketio.on('reveal_hint')
    @websocket_engine_required
    def handle_reveal_hint(data=None, engine=None):
        """Reveal a hint."""
        data = data or {}
        try:
            state = engine.reveal_hint(int(data.get('index', 0)))
        except EXPECTED_ERRORS as e:
            emit('error', {'error': str(e)})
            return

        emit('round_state', {'player_id': engine.player_id, 'state': state.to_dict()})

    @socketio.on('accept_bonus_retry')
    @websocket_engine_required
    def handle_accept_bonus_retry(data=None, engine=None):
        """Take the bonus guess."""
        try:
            state = engine.accept_bonus_retry()
        except EXPECTED_ERRORS as e:
            emit('error', {'error': str(e)})
            return

        emit('round_state', {'player_id': engine.player_id, 'state': state.to_dict()})

    @socketio.on('decline_bonus_retry')
    @websocket_engine_required
    def handle_decline_bonus_retry(data=None, engine=None):
        """Decline the bonus guess."""
        try:
            state = engine.decline_bonus_retry()
        except EXPECTED_ERRORS as e:
            emit('error', {'error': str(e)})
            return

        emit('round_state', {'player_id': engine.player_id, 'state': state.to_dict()})
        emit('stats', engine.get_stats().to_dict())

    @socketio.on('get_stats')
    @websocket_engine_required
    def handle_get_stats(data=None, engine=None):
        """Send the player's stats."""
        emit('stats', engine.get_stats().to_dict())
