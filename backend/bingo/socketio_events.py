from flask import current_app, request
from flask_socketio import emit

from bingo import get_room, socketio


def _sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _broadcast(event: str, payload) -> None:
    socketio.emit(event, payload, namespace=request.namespace)


def _rejected(result) -> bool:
    """Send the error to the requester only. True when the operation failed."""
    if result.ok:
        return False
    current_app.logger.warning(f"[socket-error] sid={_sid()} kind={result.error.kind.value} message={result.error.message}")
    emit('error', result.error.to_dict())
    return True


def _send_cards() -> None:
    for session_id, card in get_room(current_app).player_cards():
        socketio.emit('myCard', card, to=session_id, namespace=request.namespace)


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_sid()}")
    emit('roomState', get_room(current_app).room_state())


def handle_disconnect(reason=None):
    current_app.logger.info(f"[disconnect] sid={_sid()} reason={reason}")
    result = get_room(current_app).leave(_sid())
    _broadcast('roomState', result.value)


def handle_leave(data=None):
    result = get_room(current_app).leave(_sid())
    _broadcast('roomState', result.value)


def handle_create_host(data):
    result = get_room(current_app).create_host(_payload(data).get('name'), _sid())
    if _rejected(result):
        return
    emit('hostCreated', result.value)
    _broadcast('roomState', result.value['room'])


def handle_join_as_player(data):
    result = get_room(current_app).join_as_player(_payload(data).get('name'), _sid())
    if _rejected(result):
        return
    joined = result.value
    _broadcast('roomState', joined['room'])
    emit('playerJoined', {
        'room': joined['room'],
        'playerSecret': joined['playerSecret'],
        'playerId': joined['playerId'],
    })
    emit('myCard', joined['card'])


def handle_start_game(data=None):
    result = get_room(current_app).start_game(_sid())
    if _rejected(result):
        return
    _broadcast('gameStarted', result.value)
    _send_cards()
    _broadcast('roomState', result.value)


def handle_draw_number(data=None):
    result = get_room(current_app).draw_number(_sid())
    if _rejected(result):
        return
    _broadcast('numberDrawn', result.value['number'])
    _broadcast('roomState', result.value['room'])


def handle_restart_game(data=None):
    result = get_room(current_app).restart_game(_sid())
    if _rejected(result):
        return
    _broadcast('gameRestarted', result.value)
    _send_cards()
    _broadcast('roomState', result.value)


def handle_end_game(data=None):
    result = get_room(current_app).end_game(_sid())
    if _rejected(result):
        return
    _broadcast('gameEnded', result.value)


def handle_select_letter(data):
    result = get_room(current_app).select_letter(_sid(), _payload(data).get('selectedLetter'))
    if _rejected(result):
        return
    _broadcast('roomState', result.value)


def handle_claim_bingo(data=None):
    result = get_room(current_app).claim_bingo(_sid(), _payload(data).get('selectedLetter'))
    if _rejected(result):
        return
    claim = result.value
    _broadcast('bingoClaimed', {
        'playerId': claim['playerId'],
        'playerName': claim['playerName'],
        'valid': claim['valid'],
    })
    _broadcast('bingoResult', {
        'valid': claim['valid'],
        'winnerId': claim['winnerId'],
        'playerId': claim['playerId'],
        'playerName': claim['playerName'],
        'selectedLetter': claim['selectedLetter'],
    })
    _broadcast('roomState', claim['room'])


def handle_mark_cell(data):
    payload = _payload(data)
    result = get_room(current_app).mark_cell(_sid(), payload.get('row'), payload.get('col'))
    if _rejected(result):
        return
    emit('myCard', result.value['card'])
    _broadcast('roomState', result.value['room'])


def handle_reclaim_host(data):
    result = get_room(current_app).reclaim_host(_payload(data).get('hostSecret'), _sid())
    if _rejected(result):
        return
    emit('hostReclaimed', result.value)
    _broadcast('roomState', result.value)


def handle_reclaim_player(data):
    result = get_room(current_app).reclaim_player(_payload(data).get('playerSecret'), _sid())
    if _rejected(result):
        return
    reclaimed = result.value
    emit('playerReclaimed', {'room': reclaimed['room'], 'playerId': reclaimed['playerId']})
    emit('myCard', reclaimed['card'])
    _broadcast('roomState', reclaimed['room'])


_HANDLERS = {
    'connect': handle_connect,
    'disconnect': handle_disconnect,
    'leave': handle_leave,
    'createHost': handle_create_host,
    'joinAsPlayer': handle_join_as_player,
    'startGame': handle_start_game,
    'drawNumber': handle_draw_number,
    'restartGame': handle_restart_game,
    'endGame': handle_end_game,
    'selectLetter': handle_select_letter,
    'claimBingo': handle_claim_bingo,
    'markCell': handle_mark_cell,
    'reclaimHost': handle_reclaim_host,
    'reclaimPlayer': handle_reclaim_player,
}


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register every bingo request handler on the given namespace."""
    for event, handler in _HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
