"""
Gunicorn settings for the TrainingCycle API
Usage: gunicorn -c gunicorn.conf.py wsgi:app
"""

import multiprocessing
import os

bind = f"0.0.0.0:{int(os.environ.get('PORT', 8080))}"

# Requests are independent and workers hold no shared state
workers = int(os.environ.get('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))

# Kept above GRAPHQL_TIMEOUT_SECONDS
timeout = int(os.environ.get('GUNICORN_TIMEOUT', 30))

accesslog = os.environ.get('GUNICORN_ACCESS_LOG', '-')
errorlog = os.environ.get('GUNICORN_ERROR_LOG', '-')
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')

proc_name = 'trainingcycle'
