import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173,"
    "http://127.0.0.1:5173,"
    "http://localhost:5174,"
    "http://127.0.0.1:5174"
)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///reaction_game.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Cue delay window (ms); the delay is sampled from [min, max)
    CUE_DELAY_MIN_MS = int(os.environ.get('CUE_DELAY_MIN_MS', '1000'))
    CUE_DELAY_MAX_MS = int(os.environ.get('CUE_DELAY_MAX_MS', '5000'))
    # Leaderboard length
    RANKING_SIZE = int(os.environ.get('RANKING_SIZE', '10'))
    # Key of the single persisted leaderboard record
    RANKINGS_STORAGE_KEY = os.environ.get('RANKINGS_STORAGE_KEY', 'reactionGameRankings')
    # Browser origins allowed to call the API (comma separated)
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', DEFAULT_CORS_ORIGINS).split(',') if o.strip()]
