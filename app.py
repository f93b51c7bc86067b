import logging

from flask import Flask, jsonify, render_template, request
from flask_cors import CORS

import config
from analyzer import ingest, search_tickets, seed_store
from inbox import process_inbox
from knowledge_base import KNOWLEDGE_BASE
from lexicon import DEFAULT_LEXICON
from logging_setup import setup_logging
from scheduler import automation_scheduler
from store import InMemoryEmailStore, compute_stats, to_iso, utc_now

log = logging.getLogger(__name__)

NOT_FOUND = {'error': 'not found'}


def _parse_id(raw):
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def create_app(store=None, lexicon=DEFAULT_LEXICON, knowledge_base=KNOWLEDGE_BASE,
               seed=None, scheduler=automation_scheduler):
    """
    Build the Flask app around a ticket store.
    Tests pass their own store (and seed=False) instead of the in-memory default.
    """
    setup_logging()
    app = Flask(__name__, template_folder='templates', static_folder='static')
    app.json.ensure_ascii = False
    CORS(app, resources={r'/api/*': {'origins': config.CORS_ORIGINS}}, send_wildcard=True)

    store = store if store is not None else InMemoryEmailStore()
    app.extensions['email_store'] = store
    pipeline = {'lexicon': lexicon, 'entries': knowledge_base}

    if seed is None:
        seed = config.SEED_DEMO_DATA
    if seed:
        seeded = seed_store(store, **pipeline)
        log.info('[Seed] loaded %d demo tickets', len(seeded))

    @app.route('/')
    def dashboard():
        return render_template('dashboard.html', api_base=config.API_BASE_URL)

    @app.route('/api/emails')
    def api_emails():
        """Support tickets, urgent first then newest, optionally filtered by ?q=."""
        q = request.args.get('q', '')
        return jsonify(search_tickets(store.list(), q, lexicon))

    @app.route('/api/emails/<ticket_id>')
    def api_email_detail(ticket_id):
        ticket_id = _parse_id(ticket_id)
        ticket = store.get(ticket_id) if ticket_id is not None else None
        if ticket is None:
            return jsonify(NOT_FOUND), 404
        return jsonify(ticket)

    @app.route('/api/respond/<ticket_id>', methods=['POST'])
    def api_respond(ticket_id):
        """Send a reply (the draft if none given) and mark the ticket resolved."""
        ticket_id = _parse_id(ticket_id)
        ticket = store.get(ticket_id) if ticket_id is not None else None
        if ticket is None:
            return jsonify(NOT_FOUND), 404

        data = request.get_json(silent=True) or {}
        reply = data.get('reply') if isinstance(data, dict) else None
        item = store.update(
            ticket_id,
            reply=reply or ticket['draft'],
            status='resolved',
            resolved_at=to_iso(utc_now()),
        )
        if item is None:
            return jsonify(NOT_FOUND), 404
        log.info('[Respond] ticket #%s resolved', ticket_id)
        return jsonify({'ok': True, 'item': item})

    @app.route('/api/stats')
    def api_stats():
        return jsonify(compute_stats(store.list(), window_hours=config.STATS_WINDOW_HOURS))

    @app.route('/api/ingest', methods=['POST'])
    def api_ingest():
        """Accepts an array of {sender, subject, body, sent_date}."""
        items = request.get_json(silent=True)
        added = ingest(store, items, **pipeline)
        return jsonify({'added': len(added)})

    @app.route('/api/process', methods=['POST'])
    def api_process():
        """Ingest new lines from the inbox file."""
        return jsonify(process_inbox(store, **pipeline))

    @app.route('/api/status')
    def api_status():
        """Health check and automation status."""
        return jsonify({
            'status': 'running',
            'tickets': len(store.list()),
            'auto_ingest_enabled': config.AUTO_INGEST_ENABLED,
            'poll_interval_seconds': config.POLL_INTERVAL_SECONDS,
            'scheduler_jobs': scheduler.get_jobs_status() if scheduler else [],
        })

    return app


if __name__ == '__main__':
    app = create_app()
    store = app.extensions['email_store']
    automation_scheduler.start(poll_func=lambda: process_inbox(store))
    log.info('Support Triage Assistant API running on http://%s:%s', config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG, use_reloader=False)
