from flask import Blueprint, request, jsonify, current_app
from pydantic import ValidationError

from .errors import DataUnavailable, ParseError
from .models import TimelineQuery
from .timeline import build_player_timeline, timeline_from_payload, to_records

# Create blueprint
bp = Blueprint('timeline', __name__)


def get_source():
    """Data source registered by the app factory"""
    return current_app.extensions['training_data_source']


def _error(message: str, status: int):
    return jsonify({'success': False, 'errors': [message]}), status


@bp.route('/api/players/<player_id>/training-cycle')
def get_training_cycle(player_id):
    """Training-cycle timeline for a player; defaults to the last 90 days"""
    start_date = request.args.get('start_date', '').strip()
    end_date = request.args.get('end_date', '').strip()
    if not start_date or not end_date:
        default_window = TimelineQuery.default_window(player_id)
        start_date = start_date or default_window.start_date
        end_date = end_date or default_window.end_date

    try:
        query = TimelineQuery(player_id=player_id, start_date=start_date, end_date=end_date)
        entries = build_player_timeline(get_source(), query)
    except ValidationError as e:
        return _error(f'Invalid query: {e.errors()[0]["msg"]}', 400)
    except ParseError as e:
        current_app.logger.info(f"Rejected training-cycle request for player {player_id}: {e}")
        return _error(str(e), 400)
    except DataUnavailable as e:
        current_app.logger.error(f"Training data unavailable for player {player_id}: {e}")
        return _error('Training data is currently unavailable. Please try again later.', 502)

    return jsonify({
        'success': True,
        'player_id': query.player_id,
        'start_date': query.start_date,
        'end_date': query.end_date,
        'timeline': to_records(entries)
    })


@bp.route('/api/training-cycle', methods=['POST'])
def build_training_cycle():
    """Build a timeline from matches and sessions posted by the caller"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error('Request body must be a JSON object', 400)

    start_date = str(data.get('start_date') or '').strip()
    end_date = str(data.get('end_date') or '').strip()
    if not start_date or not end_date:
        return _error('start_date and end_date are required', 400)

    for key in ('matches', 'training_sessions'):
        if data.get(key) is not None and not isinstance(data[key], list):
            return _error(f'{key} must be a list', 400)

    try:
        entries = timeline_from_payload(data, start_date, end_date)
    except ParseError as e:
        return _error(str(e), 400)

    return jsonify({
        'success': True,
        'start_date': start_date,
        'end_date': end_date,
        'timeline': to_records(entries)
    })
