from datetime import datetime, timedelta, timezone

from store import InMemoryEmailStore, compute_stats, parse_timestamp, to_iso

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class TestInMemoryEmailStore:

    def test_append_assigns_next_id(self):
        store = InMemoryEmailStore([{'id': 7, 'subject': 'old'}])
        assert store.append({'subject': 'new'})['id'] == 8
        assert [t['id'] for t in store.list()] == [7, 8]

    def test_get_returns_copy(self):
        store = InMemoryEmailStore()
        store.append({'subject': 'a', 'info': {'tags': []}})
        ticket = store.get(1)
        ticket['info']['tags'].append('changed')
        assert store.get(1)['info']['tags'] == []

    def test_get_missing(self):
        assert InMemoryEmailStore().get(1) is None

    def test_update(self):
        store = InMemoryEmailStore()
        store.append({'status': 'pending'})
        updated = store.update(1, status='resolved', reply='done')
        assert updated['status'] == 'resolved'
        assert store.get(1)['reply'] == 'done'
        assert store.update(2, status='resolved') is None


def test_timestamps():
    assert to_iso(NOW) == '2026-10-18T12:00:00.000Z'
    assert parse_timestamp('2026-10-18T12:00:00.000Z') == NOW
    assert parse_timestamp('2026-10-18T12:00:00') == NOW
    assert parse_timestamp('yesterday') is None
    assert parse_timestamp(None) is None


def test_compute_stats():
    tickets = [
        {'sent_date': to_iso(NOW - timedelta(hours=1)), 'status': 'resolved',
         'sentiment': {'label': 'negative'}, 'priority': 'urgent'},
        {'sent_date': to_iso(NOW - timedelta(hours=30)), 'status': 'pending',
         'sentiment': {'label': 'positive'}, 'priority': 'normal'},
        {'sent_date': 'not a date', 'status': 'pending',
         'sentiment': {'label': 'neutral'}, 'priority': 'normal'},
    ]
    stats = compute_stats(tickets, now=NOW)
    assert stats == {
        'total24': 1,
        'resolved': 1,
        'pending': 2,
        'bySentiment': {'positive': 1, 'neutral': 1, 'negative': 1},
        'byPriority': {'urgent': 1, 'normal': 2},
        'total': 3,
    }


def test_compute_stats_empty():
    stats = compute_stats([], now=NOW)
    assert stats['resolved'] + stats['pending'] == stats['total'] == 0


def test_epoch_millisecond_timestamps():
    millis = int(NOW.timestamp() * 1000)
    assert parse_timestamp(millis) == NOW
    assert parse_timestamp(float(millis)) == NOW
    assert parse_timestamp(True) is None

    tickets = [
        {'sent_date': millis - 3600 * 1000, 'status': 'pending'},
        {'sent_date': to_iso(NOW - timedelta(hours=2)), 'status': 'pending'},
    ]
    assert compute_stats(tickets, now=NOW)['total24'] == 2
