"""
Tiny fixed knowledge base used to enrich drafted replies.
Entries are matched by keyword overlap between their topic and the email text.
"""
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class KnowledgeEntry:
    id: str
    topic: str
    content: str


KNOWLEDGE_BASE = (
    KnowledgeEntry('kb_pricing', 'pricing',
                   'Our pricing has Free, Pro, and Enterprise tiers. Pro is $49/month with priority support.'),
    KnowledgeEntry('kb_refund', 'refund',
                   'Refunds are processed within 5–7 business days after verification of the transaction.'),
    KnowledgeEntry('kb_reset', 'password reset',
                   'Use the reset link from the login page. If it expires, we can trigger a new link '
                   'that is valid for 30 minutes.'),
    KnowledgeEntry('kb_api', 'api integration',
                   'We support REST webhooks and OAuth2. Rate limit is 1000 requests/min on Pro.'),
    KnowledgeEntry('kb_verification', 'email verification',
                   'Verification emails arrive within 2–3 minutes. Check spam; we can also verify manually if needed.'),
)


def score_entry(entry: KnowledgeEntry, text: str) -> int:
    """Topic words found in the text, plus one if the topic's first word is present."""
    t = (text or '').lower()
    words = entry.topic.split()
    score = sum(1 for w in words if w in t)
    if words and words[0] in t:
        score += 1
    return score


def retrieve_kb(text: str, entries: Sequence[KnowledgeEntry] = KNOWLEDGE_BASE) -> Optional[KnowledgeEntry]:
    """Best matching entry, or None when nothing overlaps. Ties keep list order."""
    best, best_score = None, 0
    for entry in entries:
        score = score_entry(entry, text)
        if score > best_score:
            best, best_score = entry, score
    return best
