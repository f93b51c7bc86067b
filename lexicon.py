"""
Word lists and patterns used by the heuristic email analysis.
A Lexicon is immutable; pass a different one to the analysis functions to change the rules.
"""
import re
from dataclasses import dataclass
from typing import Tuple

POSITIVE_WORDS = ('thanks', 'great', 'good', 'appreciate', 'love', 'happy', 'resolved', 'working')

NEGATIVE_WORDS = (
    'issue', 'error', 'unable', 'down', 'blocked', 'fail', 'failed', 'charge', 'double',
    'immediately', 'asap', 'critical', 'urgent', 'frustrated', 'angry', 'not working', 'cannot',
)

URGENT_KEYWORDS = (
    'urgent', 'immediately', 'asap', 'critical', 'cannot access', "can't access", 'down',
    'blocked', 'system is down', 'yesterday', 'since yesterday', 'reset link', 'charged twice',
)

TOPIC_KEYWORDS = (
    'billing', 'login', 'verification', 'password', 'reset', 'integration', 'api', 'refund',
    'downtime', 'subscription', 'pricing',
)

# Only used to widen priority for negative emails, see analyzer.classify_priority
DISTRESS_PATTERN = r'down|blocked|unable|failed|error'

SUPPORT_SUBJECT_PATTERN = r'support|query|request|help|urgent|issue|error'


@dataclass(frozen=True)
class Lexicon:
    positive_words: Tuple[str, ...] = POSITIVE_WORDS
    negative_words: Tuple[str, ...] = NEGATIVE_WORDS
    urgent_keywords: Tuple[str, ...] = URGENT_KEYWORDS
    topic_keywords: Tuple[str, ...] = TOPIC_KEYWORDS
    distress_pattern: str = DISTRESS_PATTERN
    support_subject_pattern: str = SUPPORT_SUBJECT_PATTERN

    def is_distressed(self, text: str) -> bool:
        return re.search(self.distress_pattern, (text or '').lower()) is not None

    def is_support_subject(self, subject: str) -> bool:
        return re.search(self.support_subject_pattern, subject or '', re.IGNORECASE) is not None


DEFAULT_LEXICON = Lexicon()
