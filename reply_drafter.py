"""Templated reply drafts for incoming support emails."""
from typing import Sequence

from email_processor import is_urgent, score_sentiment, summarize
from knowledge_base import KNOWLEDGE_BASE, KnowledgeEntry, retrieve_kb
from lexicon import DEFAULT_LEXICON, Lexicon

EMPATHY_TROUBLE = "I'm really sorry for the trouble you're facing—thanks for flagging this."
EMPATHY_DEFAULT = 'Happy to help—thanks for reaching out!'

NEXT_STEPS_URGENT = "I've prioritized your case and started an investigation. We will update you shortly."
NEXT_STEPS_DEFAULT = "I've logged your request with our support team. We'll keep you posted."

KB_PREFIX = "Here's some information that might help right away: "

CLOSING = ('If you can share any additional details (screenshots, exact timestamps, last 4 digits '
           'of the transaction), it will help us resolve this faster.\n\n'
           'Best regards,\nSupport Assistant')


def draft_reply(email: dict,
                lexicon: Lexicon = DEFAULT_LEXICON,
                entries: Sequence[KnowledgeEntry] = KNOWLEDGE_BASE) -> str:
    sender = email.get('sender') or ''
    subject = email.get('subject') or ''
    body = email.get('body') or ''

    label = score_sentiment(body, lexicon)['label']
    urgent = is_urgent(body, lexicon)
    kb = retrieve_kb(body, entries)

    empathy = EMPATHY_TROUBLE if label == 'negative' or urgent else EMPATHY_DEFAULT
    next_steps = NEXT_STEPS_URGENT if urgent else NEXT_STEPS_DEFAULT
    kb_line = f'\n\n{KB_PREFIX}{kb.content}' if kb else ''

    return (
        f"Hi {sender.split('@')[0]},\n\n"
        f'{empathy}\n\n'
        f'Regarding your message: "{subject}"—here\'s a quick summary of what I understood: '
        f'{summarize(body)}.\n\n'
        f'{next_steps}{kb_line}\n\n'
        f'{CLOSING}'
    )
