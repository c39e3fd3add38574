"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional
from flask import request


def get_player_id(request_obj=None) -> Optional[str]:
    """
    Extract the player id from a request.

    Looks at the X-Player-Id header first, then a player_id field in the JSON
    body, then the query string.
    """
    if request_obj is None:
        request_obj = request

    player_id = request_obj.headers.get('X-Player-Id')
    if player_id:
        return player_id.strip()

    data = get_json_object(request_obj)
    if data.get('player_id'):
        return str(data['player_id']).strip()

    return request_obj.args.get('player_id') or None


def get_json_object(request_obj=None) -> dict:
    """The JSON body when it is an object, otherwise an empty dict."""
    if request_obj is None:
        request_obj = request

    data = request_obj.get_json(silent=True)
    return data if isinstance(data, dict) else {}
