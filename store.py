"""In-memory ticket store and aggregate statistics."""
import copy
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

SENTIMENT_LABELS = ('positive', 'neutral', 'negative')
PRIORITIES = ('urgent', 'normal')


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """ISO-8601 in UTC with a trailing Z, millisecond precision."""
    return dt.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 string or epoch milliseconds; naive strings are taken as UTC.
    Returns None if unparseable.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class EmailStore:
    """Interface for ticket storage. The API layer only talks to this."""

    def get(self, ticket_id: int) -> Optional[dict]:
        raise NotImplementedError

    def list(self) -> List[dict]:
        raise NotImplementedError

    def append(self, record: dict) -> dict:
        """Store a new ticket, assigning the next id. Returns the stored ticket."""
        raise NotImplementedError

    def update(self, ticket_id: int, **fields) -> Optional[dict]:
        raise NotImplementedError


class InMemoryEmailStore(EmailStore):
    """Ordered, process-local ticket list. State is lost on restart."""

    def __init__(self, tickets: Optional[List[dict]] = None):
        self._tickets = [copy.deepcopy(t) for t in (tickets or [])]
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._tickets)

    def _find(self, ticket_id: int) -> Optional[dict]:
        for t in self._tickets:
            if t.get('id') == ticket_id:
                return t
        return None

    def get(self, ticket_id: int) -> Optional[dict]:
        with self._lock:
            t = self._find(ticket_id)
            return copy.deepcopy(t) if t else None

    def list(self) -> List[dict]:
        with self._lock:
            return copy.deepcopy(self._tickets)

    def append(self, record: dict) -> dict:
        with self._lock:
            next_id = max((t['id'] for t in self._tickets), default=0) + 1
            ticket = copy.deepcopy(record)
            ticket['id'] = next_id
            self._tickets.append(ticket)
            return copy.deepcopy(ticket)

    def update(self, ticket_id: int, **fields) -> Optional[dict]:
        with self._lock:
            t = self._find(ticket_id)
            if t is None:
                return None
            t.update(copy.deepcopy(fields))
            return copy.deepcopy(t)


def compute_stats(tickets: List[dict], now: Optional[datetime] = None, window_hours: int = 24) -> Dict:
    """Counts for the dashboard: recent volume, status, sentiment and priority."""
    now = now or utc_now()
    window = timedelta(hours=window_hours)

    total_recent = 0
    for t in tickets:
        sent = parse_timestamp(t.get('sent_date'))
        if sent is not None and now - sent <= window:
            total_recent += 1

    resolved = sum(1 for t in tickets if t.get('status') == 'resolved')
    by_sentiment = {label: 0 for label in SENTIMENT_LABELS}
    by_priority = {p: 0 for p in PRIORITIES}
    for t in tickets:
        label = (t.get('sentiment') or {}).get('label')
        if label in by_sentiment:
            by_sentiment[label] += 1
        if t.get('priority') in by_priority:
            by_priority[t['priority']] += 1

    return {
        'total24': total_recent,
        'resolved': resolved,
        'pending': len(tickets) - resolved,
        'bySentiment': by_sentiment,
        'byPriority': by_priority,
        'total': len(tickets),
    }
