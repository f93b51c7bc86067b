"""Rule-based email analysis: sentiment, urgency, contact info and a short summary."""
import re
from typing import Dict, List

from lexicon import DEFAULT_LEXICON, Lexicon

PHONE_RE = re.compile(r'\b\+?\d[\d\s\-]{6,}\d\b')
EMAIL_RE = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')

SUMMARY_FALLBACK_CHARS = 160


def parse_email_line(line: str) -> dict:
    """
    Expected line format: sender|subject|body|sent_date
    Simple fallbacks are used if parts are missing.
    """
    parts = line.split('|')
    sender = parts[0].strip() if len(parts) > 0 else 'unknown'
    subject = parts[1].strip() if len(parts) > 1 else ''
    body = parts[2].strip() if len(parts) > 2 else ''
    sent_date = parts[3].strip() if len(parts) > 3 else ''
    return {'sender': sender, 'subject': subject, 'body': body, 'sent_date': sent_date}


def score_sentiment(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Dict[str, object]:
    """Return {'score', 'label'}; each listed word counts once if it appears anywhere in the text."""
    t = (text or '').lower()
    score = 0
    for w in lexicon.positive_words:
        if w in t:
            score += 1
    for w in lexicon.negative_words:
        if w in t:
            score -= 1
    if score > 0:
        label = 'positive'
    elif score < 0:
        label = 'negative'
    else:
        label = 'neutral'
    return {'score': score, 'label': label}


def is_urgent(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    t = (text or '').lower()
    return any(k in t for k in lexicon.urgent_keywords)


def _unique(items: List[str]) -> List[str]:
    seen = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def extract_info(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Dict[str, List[str]]:
    """Pull phone numbers, email addresses and topic tags out of free text."""
    text = text or ''
    phones = _unique([m.strip() for m in PHONE_RE.findall(text)])
    emails = _unique([m.lower() for m in EMAIL_RE.findall(text)])
    lower = text.lower()
    tags = [k for k in lexicon.topic_keywords if k in lower]
    return {'phones': phones, 'emails': emails, 'tags': tags}


def summarize(text: str) -> str:
    """First two sentences of the text, or its first 160 characters when there is no sentence break."""
    text = text or ''
    collapsed = re.sub(r'\s+', ' ', text).strip()
    sentences = collapsed.split('. ')
    if len(sentences) > 1:
        first_two = '. '.join(sentences[:2])
    else:
        first_two = collapsed[:SUMMARY_FALLBACK_CHARS]
    return first_two or text[:SUMMARY_FALLBACK_CHARS]
