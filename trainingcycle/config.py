"""
Configuration constants for TrainingCycle
"""
import os

# GraphQL (Hasura) endpoint serving matches and training sessions
GRAPHQL_URL = os.environ.get('GRAPHQL_URL', 'http://localhost:8080/v1/graphql')
HASURA_ADMIN_SECRET = os.environ.get('HASURA_ADMIN_SECRET') or None
GRAPHQL_TIMEOUT_SECONDS = float(os.environ.get('GRAPHQL_TIMEOUT_SECONDS', '10'))

# Which data source the API uses: 'graphql' or 'json'
DATA_SOURCE = os.environ.get('DATA_SOURCE', 'graphql').strip().lower()
DATA_DIR = os.environ.get('DATA_DIR', 'data')

# Window used when the caller gives no dates (last 90 days, ending today)
DEFAULT_WINDOW_DAYS = 90

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# Flask-Limiter defaults, separated by ';'
RATELIMIT_DEFAULTS = [
    limit.strip()
    for limit in os.environ.get('RATELIMIT_DEFAULTS', '200 per day;50 per hour').split(';')
    if limit.strip()
]
