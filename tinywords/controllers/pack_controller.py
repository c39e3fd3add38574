"""
Pack Controller

Handles word pack listing.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..services.word_source import WordSourceError
from ..utils.game_logger import game_logger

pack_bp = Blueprint('pack', __name__)


@pack_bp.route('/packs', methods=['GET'])
def list_packs():
    """List enabled word packs."""
    game_service = get_game_service()
    if not game_service:
        return jsonify({
            'success': False,
            'error': 'Game service unavailable'
        }), 500

    try:
        packs = game_service.list_packs()
    except WordSourceError as e:
        game_logger.log_error(request, e, 'list_packs')
        return jsonify({
            'success': False,
            'error': "Couldn't load packs. Check your connection and try again.",
            'packs': []
        }), 503

    return jsonify({
        'success': True,
        'packs': [{'id': pack.id, 'name': pack.name} for pack in packs]
    })
