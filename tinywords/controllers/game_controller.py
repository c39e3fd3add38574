"""
Game Controller

Handles all round-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..config import WORD_LENGTHS
from ..services.game_service import get_game_service, NoActiveRoundError, StaleLoadError
from ..services.round_service import RoundStateError
from ..services.word_source import WordSourceError
from ..utils.decorators import require_engine
from ..utils.helpers import get_json_object
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _error(action, message, status, player_id=None, **kwargs):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response, player_id, **kwargs)
    return jsonify(error_response), status


def _state_error(action, error, player_id):
    """Maps engine exceptions onto HTTP responses."""
    if isinstance(error, NoActiveRoundError):
        return _error(action, str(error), 404, player_id)
    if isinstance(error, (RoundStateError, StaleLoadError)):
        return _error(action, str(error), 409, player_id)
    game_logger.log_error(request, error, action, player_id)
    return _error(action, str(error), 500, player_id)


@game_bp.route('/round', methods=['POST'])
@require_engine
def start_round(engine=None):
    """Start a new round for the given word length and optional pack."""
    data = get_json_object()

    try:
        length = int(data.get('length', 5))
    except (TypeError, ValueError):
        return _error('start_round', 'Word length must be a number', 400, engine.player_id)

    if length not in WORD_LENGTHS:
        return _error('start_round', f"Word length must be one of {', '.join(str(n) for n in WORD_LENGTHS)}",
                      400, engine.player_id)

    pack_id = data.get('pack_id') or None
    pack_name = data.get('pack_name')

    game_logger.log_user_action(request, 'start_round', engine.player_id,
                                word_length=length, pack_id=pack_id)

    try:
        state = engine.start_round(length, pack_id, pack_name)
    except (StaleLoadError, WordSourceError) as e:
        return _error('start_round', str(e), 409, engine.player_id)
    except Exception as e:
        return _state_error('start_round', e, engine.player_id)

    response_data = {
        'success': True,
        'player_id': engine.player_id,
        'state': state.to_dict()
    }
    game_logger.log_server_response(request, 'start_round', True, response_data, engine.player_id,
                                    word_length=length, word_source=response_data['state']['word_source'])
    return jsonify(response_data), 201


@game_bp.route('/round', methods=['GET'])
@require_engine
def get_round(engine=None):
    """Get the current round state."""
    try:
        state = engine.get_round_state()
    except Exception as e:
        return _state_error('get_round', e, engine.player_id)

    return jsonify({
        'success': True,
        'state': state.to_dict()
    })


@game_bp.route('/round/guess', methods=['POST'])
@require_engine
def submit_guess(engine=None):
    """Submit a guess for validation and evaluation."""
    data = get_json_object()
    if not isinstance(data.get('guess'), str):
        return _error('submit_guess', 'Guess is required', 400, engine.player_id)

    guess = data['guess']
    game_logger.log_user_action(request, 'submit_guess', engine.player_id,
                                guess=guess, guess_length=len(guess))

    try:
        outcome = engine.submit_guess(guess)
    except Exception as e:
        return _state_error('submit_guess', e, engine.player_id)

    response_data = {
        'success': outcome.accepted,
        **outcome.to_dict()
    }
    if not outcome.accepted:
        response_data['error'] = outcome.message
        game_logger.log_server_response(request, 'submit_guess', False, response_data, engine.player_id,
                                        validation_error=outcome.message, attempted_guess=guess)
        return jsonify(response_data), 400

    game_logger.log_server_response(request, 'submit_guess', True, response_data, engine.player_id,
                                    guess=guess, phase=outcome.state.phase.value)
    return jsonify(response_data)


@game_bp.route('/round/hint', methods=['POST'])
@require_engine
def reveal_hint(engine=None):
    """Reveal one hint of the current puzzle."""
    data = get_json_object()
    try:
        index = int(data.get('index', 0))
    except (TypeError, ValueError):
        return _error('reveal_hint', 'Hint index must be a number', 400, engine.player_id)

    game_logger.log_user_action(request, 'reveal_hint', engine.player_id, hint_index=index)

    try:
        state = engine.reveal_hint(index)
    except Exception as e:
        return _state_error('reveal_hint', e, engine.player_id)

    return jsonify({
        'success': True,
        'state': state.to_dict()
    })


@game_bp.route('/round/retry', methods=['POST'])
@require_engine
def accept_bonus_retry(engine=None):
    """Take the one-time bonus guess."""
    game_logger.log_user_action(request, 'accept_bonus_retry', engine.player_id)

    try:
        state = engine.accept_bonus_retry()
    except Exception as e:
        return _state_error('accept_bonus_retry', e, engine.player_id)

    return jsonify({
        'success': True,
        'state': state.to_dict()
    })


@game_bp.route('/round/decline', methods=['POST'])
@require_engine
def decline_bonus_retry(engine=None):
    """Turn down the bonus guess and finish the round as a loss."""
    game_logger.log_user_action(request, 'decline_bonus_retry', engine.player_id)

    try:
        state = engine.decline_bonus_retry()
    except Exception as e:
        return _state_error('decline_bonus_retry', e, engine.player_id)

    return jsonify({
        'success': True,
        'state': state.to_dict(),
        'stats': engine.get_stats().to_dict()
    })


@game_bp.route('/stats', methods=['GET'])
@require_engine
def get_stats(engine=None):
    """Get wins today, the current streak and total games."""
    try:
        stats = engine.get_stats()
    except Exception as e:
        game_logger.log_error(request, e, 'get_stats', engine.player_id)
        return _error('get_stats', str(e), 500, engine.player_id)

    return jsonify({
        'success': True,
        'player_id': engine.player_id,
        'stats': stats.to_dict()
    })


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    game_service = get_game_service()

    response_data = {
        'status': 'healthy',
        'active_players': len(game_service.engines) if game_service else 0,
        'catalog_available': bool(game_service and game_service.catalog is not None),
        'log_stats': game_logger.get_log_stats()
    }
    return jsonify(response_data)
