"""
Configuration for the Support Triage Assistant.
Values come from environment variables (a local .env file is honoured).
"""
import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(__file__)
DATA_DIR = os.path.join(BASE_DIR, 'data')

# ============ Server ============
HOST = os.getenv('HOST', '127.0.0.1')
PORT = int(os.getenv('PORT', '4000'))
DEBUG = os.getenv('DEBUG', 'false').lower() == 'true'
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# ============ Dashboard ============
# Base URL the dashboard uses for its API calls
API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:4000')

# ============ Logging ============
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# ============ Tickets ============
SEED_DEMO_DATA = os.getenv('SEED_DEMO_DATA', 'true').lower() == 'true'
STATS_WINDOW_HOURS = int(os.getenv('STATS_WINDOW_HOURS', '24'))

# ============ Inbox Polling ============
# Inbox file lines look like: sender|subject|body|sent_date
INBOX_FILE = os.getenv('INBOX_FILE', os.path.join(DATA_DIR, 'emails.txt'))
PROCESSED_FILE = os.getenv('PROCESSED_FILE', os.path.join(DATA_DIR, 'processed_emails.txt'))
POLL_INTERVAL_SECONDS = int(os.getenv('POLL_INTERVAL', '60'))
AUTO_INGEST_ENABLED = os.getenv('AUTO_INGEST', 'false').lower() == 'true'
