"""
Command-line client that pushes emails into a running Support Triage Assistant.

    python ingest_client.py emails.json --base-url http://localhost:4000

The file must hold a JSON array of {sender, subject, body, sent_date} objects.
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

import requests

import config
from logging_setup import setup_logging

log = logging.getLogger(__name__)


def post_emails(items: List[dict], base_url: Optional[str] = None, timeout: int = 30) -> dict:
    """POST items to /api/ingest and return the decoded response."""
    url = (base_url or config.API_BASE_URL).rstrip('/') + '/api/ingest'
    resp = requests.post(url, json=items, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Ingest emails from a JSON file.')
    parser.add_argument('path', help='JSON file containing an array of emails')
    parser.add_argument('--base-url', default=config.API_BASE_URL, help='API base URL')
    args = parser.parse_args(argv)

    setup_logging()
    with open(args.path, encoding='utf-8') as fh:
        items = json.load(fh)

    try:
        result = post_emails(items, args.base_url)
    except requests.RequestException as e:
        log.error('[Ingest Client] request failed: %s', e)
        return 1

    log.info('[Ingest Client] added %s emails', result.get('added', 0))
    print(json.dumps(result))
    return 0


if __name__ == '__main__':
    sys.exit(main())
