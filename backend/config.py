import os


def _origins(raw):
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ORIGINS = _origins(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
    ))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Single shared room; the id only shows up in the public state
    ROOM_ID = os.environ.get('ROOM_ID', 'BINGO-ROOM')
    # Optional pattern in play for every new room (A-Z). Empty means the host picks.
    DEFAULT_LETTER = os.environ.get('DEFAULT_LETTER') or None
    # Optional: fixed seed for card generation and draws (demos only)
    RANDOM_SEED = int(os.environ['RANDOM_SEED']) if os.environ.get('RANDOM_SEED') else None
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
