"""
Analysis pipeline: enrich a raw email into a ticket and add it to the store.
sentiment -> priority -> extracted info -> reply draft.
"""
import logging
from datetime import timedelta
from typing import List, Sequence

from email_processor import extract_info, is_urgent, score_sentiment
from knowledge_base import KNOWLEDGE_BASE, KnowledgeEntry
from lexicon import DEFAULT_LEXICON, Lexicon
from reply_drafter import draft_reply
from store import EmailStore, parse_timestamp, to_iso, utc_now

log = logging.getLogger(__name__)

RAW_FIELDS = ('sender', 'subject', 'body')
# Set by the pipeline or by a response, never by the sender
DERIVED_FIELDS = ('id', 'sentiment', 'priority', 'info', 'draft', 'reply', 'status', 'resolved_at')

DEMO_EMAILS = [
    ('alice@example.com', 'Help required with account verification',
     "I am facing issues with verifying my account. The verification email never arrived. "
     "Can you assist? It's urgent.", 30),
    ('bob@customer.io', 'Immediate support needed for billing error',
     'There is a billing error where I was charged twice. This needs immediate correction.', 120),
    ('carol@company.org', 'Question: integration with API',
     "Do you support integration with third-party APIs? Specifically, I'm looking for CRM "
     "integration options.", 240),
    ('dave@startup.dev', 'Critical help needed for downtime',
     'Our servers are down, and we need immediate support. This is highly critical.', 10),
]


def classify_priority(body: str, sentiment: dict, lexicon: Lexicon = DEFAULT_LEXICON) -> str:
    """Urgent on any urgency phrase, or when a negative email matches the distress pattern."""
    urgent = is_urgent(body, lexicon) or (
        sentiment['label'] == 'negative' and lexicon.is_distressed(body))
    return 'urgent' if urgent else 'normal'


def normalize_record(item) -> dict:
    """Copy a raw payload item. Text fields are coerced to str (missing -> ''); derived fields are dropped."""
    record = dict(item) if isinstance(item, dict) else {}
    for field in DERIVED_FIELDS:
        record.pop(field, None)
    for field in RAW_FIELDS:
        value = record.get(field)
        record[field] = '' if value is None else str(value)
    record.setdefault('sent_date', None)
    return record


def analyze_email(raw: dict,
                  lexicon: Lexicon = DEFAULT_LEXICON,
                  entries: Sequence[KnowledgeEntry] = KNOWLEDGE_BASE) -> dict:
    email = normalize_record(raw)
    body = email['body']
    sentiment = score_sentiment(body, lexicon)
    return {
        **email,
        'sentiment': sentiment,
        'priority': classify_priority(body, sentiment, lexicon),
        'info': extract_info(body, lexicon),
        'draft': draft_reply(email, lexicon, entries),
        'status': 'pending',
    }


def ingest(store: EmailStore, items,
           lexicon: Lexicon = DEFAULT_LEXICON,
           entries: Sequence[KnowledgeEntry] = KNOWLEDGE_BASE) -> List[dict]:
    """Analyze each raw item and append it. Anything other than a list adds nothing."""
    if not isinstance(items, list):
        log.warning('[Ingest] expected a list, got %s; nothing added', type(items).__name__)
        return []
    added = [store.append(analyze_email(item, lexicon, entries)) for item in items]
    for t in added:
        log.info('[Ingest] ticket #%s priority=%s sentiment=%s',
                 t['id'], t['priority'], t['sentiment']['label'])
    return added


def seed_store(store: EmailStore,
               lexicon: Lexicon = DEFAULT_LEXICON,
               entries: Sequence[KnowledgeEntry] = KNOWLEDGE_BASE,
               now=None) -> List[dict]:
    """Load the demo emails, dated relative to now."""
    now = now or utc_now()
    items = [
        {'sender': sender, 'subject': subject, 'body': body,
         'sent_date': to_iso(now - timedelta(minutes=minutes_ago))}
        for sender, subject, body, minutes_ago in DEMO_EMAILS
    ]
    return ingest(store, items, lexicon, entries)


def search_tickets(tickets: List[dict], q: str = '', lexicon: Lexicon = DEFAULT_LEXICON) -> List[dict]:
    """Support-looking tickets, optionally filtered by q, urgent first then newest first."""
    out = [t for t in tickets if lexicon.is_support_subject(str(t.get('subject') or ''))]
    q = (q or '').lower()
    if q:
        out = [t for t in out if q in f"{t.get('subject') or ''} {t.get('body') or ''}".lower()]

    def newest_key(t):
        sent = parse_timestamp(t.get('sent_date'))
        return sent.timestamp() if sent else float('-inf')

    out.sort(key=newest_key, reverse=True)
    out.sort(key=lambda t: 0 if t.get('priority') == 'urgent' else 1)
    return out
