from flask import Blueprint, current_app, jsonify

from bingo import get_room

room = Blueprint('room', __name__)


@room.route('/state', methods=['GET'])
def get_room_state():
    """Public view of the shared room; no secrets, no cards."""
    return jsonify(get_room(current_app).room_state())


@room.route('/patterns', methods=['GET'])
def list_patterns():
    return jsonify({'letters': get_room(current_app).patterns.letters()})


@room.route('/patterns/<string:letter>', methods=['GET'])
def get_pattern(letter):
    catalog = get_room(current_app).patterns
    if not catalog.is_valid_letter(letter):
        return jsonify({'error': f'Invalid letter: {letter}. Must be A-Z'}), 400
    pattern = catalog.get_pattern(letter)
    return jsonify({
        'letter': letter.strip().upper(),
        'pattern': [list(row) for row in pattern],
    })
