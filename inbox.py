"""
File-based mail source for demos.
Each line of the inbox file is one email (sender|subject|body|sent_date);
lines already seen are tracked by hash in the processed file.
"""
import hashlib
import logging
import os
import threading
from typing import Dict, Optional

import config
from analyzer import ingest
from email_processor import parse_email_line
from store import EmailStore, to_iso, utc_now

log = logging.getLogger(__name__)

# The poller thread and POST /api/process may run at the same time;
# reading, ingesting and recording hashes must happen as one step.
_inbox_lock = threading.Lock()


def email_hash(text: str) -> str:
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


def process_inbox(store: EmailStore,
                  inbox_file: Optional[str] = None,
                  processed_file: Optional[str] = None,
                  **pipeline) -> Dict:
    """Ingest every unseen inbox line. Extra keyword args go to analyzer.ingest."""
    inbox_file = inbox_file or config.INBOX_FILE
    processed_file = processed_file or config.PROCESSED_FILE

    if not os.path.exists(inbox_file):
        log.info('[Inbox] %s not found, nothing to process', inbox_file)
        return {'processed': 0, 'created': 0, 'message': 'No inbox file found', 'source': 'file'}

    with _inbox_lock:
        created = _ingest_unseen(store, inbox_file, processed_file, pipeline)

    log.info('[Inbox] processed %s, created %d tickets', inbox_file, len(created))
    return {'processed': 'complete', 'created': len(created), 'source': 'file', 'tickets': created}


def _ingest_unseen(store: EmailStore, inbox_file: str, processed_file: str, pipeline: dict) -> list:
    os.makedirs(os.path.dirname(processed_file) or '.', exist_ok=True)
    if not os.path.exists(processed_file):
        open(processed_file, 'w', encoding='utf-8').close()

    with open(processed_file, encoding='utf-8') as pf:
        processed_hashes = set(line.strip() for line in pf if line.strip())

    created = []
    with open(inbox_file, encoding='utf-8') as inbox:
        for raw in inbox:
            raw = raw.strip()
            if not raw:
                continue
            h = email_hash(raw)
            if h in processed_hashes:
                continue

            email = parse_email_line(raw)
            if not email['sent_date']:
                email['sent_date'] = to_iso(utc_now())
            for ticket in ingest(store, [email], **pipeline):
                created.append({'id': ticket['id'], 'priority': ticket['priority'],
                                'sentiment': ticket['sentiment']['label']})

            processed_hashes.add(h)
            with open(processed_file, 'a', encoding='utf-8') as pf:
                pf.write(h + '\n')
    return created
