import threading

from inbox import email_hash, process_inbox


def test_missing_inbox(store, tmp_path):
    result = process_inbox(store, str(tmp_path / 'missing.txt'), str(tmp_path / 'processed.txt'))
    assert result['created'] == 0
    assert len(store) == 0


def test_processes_each_line_once(store, tmp_path):
    inbox = tmp_path / 'emails.txt'
    processed = tmp_path / 'state' / 'processed.txt'
    inbox.write_text(
        'erin@shop.example|Refund request|I was charged twice|2026-10-18T08:00:00Z\n'
        '\n'
        'frank@acme.test|Login help|I cannot access my account\n',
        encoding='utf-8')

    first = process_inbox(store, str(inbox), str(processed))
    assert first['created'] == 2
    assert [t['id'] for t in first['tickets']] == [1, 2]
    tickets = store.list()
    assert tickets[0]['sent_date'] == '2026-10-18T08:00:00Z'
    assert tickets[1]['sent_date'].endswith('Z')
    assert tickets[1]['priority'] == 'urgent'

    assert process_inbox(store, str(inbox), str(processed))['created'] == 0

    with open(inbox, 'a', encoding='utf-8') as fh:
        fh.write('grace@partner.io|Pricing query|Thanks for the great demo\n')
    again = process_inbox(store, str(inbox), str(processed))
    assert again['created'] == 1
    assert again['tickets'][0]['sentiment'] == 'positive'
    assert len(processed.read_text(encoding='utf-8').split()) == 3


def test_email_hash_is_stable():
    assert email_hash('a|b|c') == email_hash('a|b|c')
    assert email_hash('a|b|c') != email_hash('a|b|d')


def test_concurrent_runs_ingest_each_line_once(store, tmp_path):
    inbox = tmp_path / 'emails.txt'
    processed = tmp_path / 'processed.txt'
    inbox.write_text(''.join(f'user{i}@x.io|Help {i}|Body {i}\n' for i in range(300)), encoding='utf-8')

    start = threading.Barrier(2)
    results = []

    def run():
        start.wait()
        results.append(process_inbox(store, str(inbox), str(processed)))

    threads = [threading.Thread(target=run) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(r['created'] for r in results) == [0, 300]
    assert len(store) == 300
    assert len(processed.read_text(encoding='utf-8').split()) == 300
