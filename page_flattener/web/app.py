"""
Flask web application for the page flattener.

Serves a small homepage and returns the flattened HTML of any page
requested under ``/site/<url>``.
"""

import asyncio
import re

from flask import Flask, Response, render_template, request, jsonify

from ..config import FlattenConfig
from ..flatten import NetworkError, ParseError, render_flattened
from ..utils.log import get_logger

_COLLAPSED_SCHEME = re.compile(r'^(https?):/(?!/)', re.IGNORECASE)


def create_app(config: FlattenConfig = None):
    """Create and configure the Flask application."""
    app = Flask(__name__, template_folder='templates')
    app.flatten_config = config or FlattenConfig.from_env()
    logger = get_logger("web")

    @app.route('/')
    def index():
        """Render the main UI page."""
        return render_template('index.html')

    @app.route('/site/<path:site_url>', merge_slashes=False)
    def render_site(site_url):
        """Return the flattened HTML for the encoded URL in the path."""
        # The path converter has already percent-decoded the URL once
        url = site_url.strip()
        # Proxies may collapse the double slash after the scheme
        url = _COLLAPSED_SCHEME.sub(r'\1://', url)
        if not url:
            return jsonify({'error': 'URL is required'}), 400

        query = request.query_string.decode('utf-8', errors='replace')
        if query:
            url = f"{url}?{query}"

        logger.info(f"Rendering page at /site/{site_url}")

        try:
            html = asyncio.run(render_flattened(url, app.flatten_config))
        except (NetworkError, ParseError) as e:
            logger.error(f"Failed to render {url}: {e}")
            return jsonify({'error': str(e), 'url': url}), 502

        return Response(html, mimetype='text/html')

    return app


def run_app(host: str = '127.0.0.1', port: int = 4000, debug: bool = False):
    """Run the Flask web application."""
    app = create_app()
    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_app()
