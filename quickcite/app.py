"""
QuickCite - Flask Application
JSON API over the citation core, plus the extension's download formats.

Endpoints:
- POST /api/classify - Classify a title/URL pair
- POST /api/cite - Cite one capture payload (not stored)
- GET|POST /api/quotes - List or save quotes in this session
- DELETE /api/quotes/<id> - Delete a saved quote
- POST /api/quotes/<id>/select - Make a quote current; returns its citations
- GET|POST /api/preferences - Export preferences
- POST /reset - Clear session state
- GET /api/bibliography - Sorted (optionally grouped) bibliography
- GET /download/bibliography.docx - Word bibliography
- GET /export - Text export of every quote (?kind=bibliography for the bibliography file)
- GET /api/styles - Available citation styles
- GET /health - Health check
"""

import io
import os
import uuid
import logging
from datetime import datetime, timezone

from flask import Flask, Response, current_app, jsonify, request, send_file, session

from . import __version__
from .config import DEFAULT_STYLE, LOG_LEVEL, SECRET_KEY
from .models import CitationStyle, InvalidCaptureError, SourceType
from .detectors import detect_type
from .extractors import record_from_dict
from .router import get_citation
from .bibliography import assemble_bibliography
from .export import (
    DOCX_MIMETYPE, ExportPreferences, bibliography_docx, bibliography_text,
    export_quotes, signal_phrases,
)
from .session import QuoteSession, SessionStore

logger = logging.getLogger(__name__)

STORE_KEY = 'quickcite_sessions'


def create_app(config=None) -> Flask:
    """
    Application factory.

    Args:
        config: Optional mapping merged into app.config (e.g. TESTING=True)
    """
    app = Flask(__name__)
    app.secret_key = SECRET_KEY
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024
    app.config['QUICKCITE_DEFAULT_STYLE'] = DEFAULT_STYLE
    if config:
        app.config.update(config)

    app.extensions[STORE_KEY] = SessionStore()
    _register_routes(app)
    return app


# =============================================================================
# SESSION HELPERS
# =============================================================================

def get_quote_session() -> QuoteSession:
    """Get or create the QuoteSession for the current browser session."""
    session_id = session.get('session_id')
    if not session_id:
        session_id = str(uuid.uuid4())
        session['session_id'] = session_id
    return current_app.extensions[STORE_KEY].get(session_id)


def clear_quote_session() -> None:
    current_app.extensions[STORE_KEY].discard(session.get('session_id'))
    session.pop('session_id', None)


def _requested_style(data=None):
    """Style from the JSON body or query string, else the app default."""
    value = (data or {}).get('style') or request.args.get('style')
    return value or current_app.config['QUICKCITE_DEFAULT_STYLE']


def _flag(name: str) -> bool:
    return request.args.get(name, 'false').lower() in ('1', 'true', 'yes')


def _quote_payload(record) -> dict:
    payload = record.to_dict()
    payload['citations'] = {
        style.value: get_citation(record, style).to_dict() for style in CitationStyle
    }
    return payload


# =============================================================================
# ROUTES
# =============================================================================

def _register_routes(app: Flask) -> None:

    @app.route('/api/classify', methods=['POST'])
    def api_classify():
        """
        Request JSON:
            { "title": "Official Statement | EPA", "url": "https://www.epa.gov/x" }

        Response JSON:
            { "success": true, "type": "government", "rule": "is_government" }
        """
        try:
            data = request.get_json(silent=True) or {}
            detection = detect_type(data.get('title'), data.get('url'), bool(data.get('isVideo')))
            return jsonify({
                'success': True,
                'type': detection.source_type.value,
                'rule': detection.matched_rule,
                'hints': {k: v for k, v in detection.hints.items() if v},
            })
        except Exception as e:
            logger.exception("[API] classify failed")
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/cite', methods=['POST'])
    def api_cite():
        """
        Cite a capture payload without saving it.

        Request JSON:
            { "text": "...", "sourceUrl": "...", "sourceTitle": "...", "style": "APA" }

        Response JSON:
            { "success": true, "citation": "...", "plain": "...", "in_text": "...", "type": "academic" }
        """
        try:
            data = request.get_json(silent=True) or {}
            record = record_from_dict(data)
            citation = get_citation(record, _requested_style(data))
            result = citation.to_dict()
            result['type'] = result.pop('source_type')
            return jsonify({'success': True, **result})
        except InvalidCaptureError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except Exception as e:
            logger.exception("[API] cite failed")
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/quotes', methods=['GET'])
    def api_list_quotes():
        """Saved quotes, newest first unless ?sort=oldest."""
        quote_session = get_quote_session()
        quotes = quote_session.sorted_quotes(request.args.get('sort'))
        return jsonify({
            'success': True,
            'count': len(quotes),
            'current_id': quote_session.current_id,
            'quotes': [q.to_dict() for q in quotes],
        })

    @app.route('/api/quotes', methods=['POST'])
    def api_save_quote():
        try:
            record = record_from_dict(request.get_json(silent=True) or {})
            stored = get_quote_session().add(record)
            logger.info("[API] Saved quote %s from %s", stored.id, stored.source_url)
            return jsonify({'success': True, 'quote': _quote_payload(stored)}), 201
        except InvalidCaptureError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except Exception as e:
            logger.exception("[API] save failed")
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/quotes/<quote_id>', methods=['DELETE'])
    def api_delete_quote(quote_id):
        if not get_quote_session().delete(quote_id):
            return jsonify({'success': False, 'error': 'Quote not found'}), 404
        return jsonify({'success': True})

    @app.route('/api/quotes/<quote_id>/select', methods=['POST'])
    def api_select_quote(quote_id):
        """Make a quote current and return everything the quote view shows."""
        quote_session = get_quote_session()
        record = quote_session.select(quote_id)
        if record is None:
            return jsonify({'success': False, 'error': 'Quote not found'}), 404
        return jsonify({
            'success': True,
            'quote': _quote_payload(record),
            'signal_phrases': signal_phrases(record),
        })

    @app.route('/api/preferences', methods=['GET', 'POST'])
    def api_preferences():
        quote_session = get_quote_session()
        if request.method == 'POST':
            quote_session.preferences = ExportPreferences.from_dict(request.get_json(silent=True) or {})
        return jsonify({'success': True, 'preferences': quote_session.preferences.to_dict()})

    @app.route('/reset', methods=['POST'])
    def reset():
        """Clear session state and start fresh."""
        try:
            clear_quote_session()
            return jsonify({'success': True})
        except Exception as e:
            logger.exception("[API] reset failed")
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/bibliography', methods=['GET'])
    def api_bibliography():
        """?style=apa&group=true"""
        try:
            quote_session = get_quote_session()
            bibliography = assemble_bibliography(
                quote_session.quotes, _requested_style(), group=_flag('group')
            )
            result = bibliography.to_dict()
            result['text'] = bibliography.to_text()
            return jsonify({'success': True, **result})
        except Exception as e:
            logger.exception("[API] bibliography failed")
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/download/bibliography.docx', methods=['GET'])
    def download_bibliography():
        """Word bibliography with hanging indents."""
        try:
            quote_session = get_quote_session()
            if not quote_session.quotes:
                return jsonify({'success': False, 'error': 'No quotes saved'}), 400

            data = bibliography_docx(quote_session.quotes, _requested_style(), group=_flag('group'))
            return send_file(
                io.BytesIO(data),
                mimetype=DOCX_MIMETYPE,
                as_attachment=True,
                download_name=f"quickcite-bibliography-{datetime.now():%Y-%m-%d}.docx",
            )
        except Exception as e:
            logger.exception("[API] docx export failed")
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/export', methods=['GET'])
    def export():
        """Plain-text download of every saved quote, or the bibliography file."""
        quote_session = get_quote_session()
        if not quote_session.quotes:
            return jsonify({'success': False, 'error': 'No quotes to export'}), 400

        now = datetime.now()
        preferences = quote_session.preferences
        quotes = quote_session.sorted_quotes()
        if request.args.get('kind') == 'bibliography':
            body = bibliography_text(quotes, preferences, now, group=_flag('group'))
            filename = f"quickcite-bibliography-{now:%Y-%m-%d}.txt"
        else:
            body = export_quotes(quotes, preferences, now)
            filename = f"quotes-export-{now:%Y-%m-%d}.txt"

        return Response(
            body,
            mimetype='text/plain',
            headers={'Content-Disposition': f'attachment; filename={filename}'},
        )

    @app.route('/api/styles', methods=['GET'])
    def api_styles():
        """Return available citation styles and source types."""
        return jsonify({
            'styles': [style.label for style in CitationStyle],
            'default': CitationStyle.from_string(current_app.config['QUICKCITE_DEFAULT_STYLE']).label,
            'source_types': [t.value for t in SourceType],
        })

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'version': __version__,
            'timestamp': datetime.now(timezone.utc).isoformat(),
        })


# =============================================================================
# MAIN
# =============================================================================

def main():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('DEBUG', 'false').lower() == 'true'
    create_app().run(host='0.0.0.0', port=port, debug=debug)


if __name__ == '__main__':
    main()
