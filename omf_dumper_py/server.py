"""
OMF Dumper Flask Server

Features:
- Single-request dump of an uploaded OMF object file
- JSON output identical to `omf-dumper --json`
- Partial results plus error description for malformed files
"""

from typing import Optional

from flask import Flask, request, jsonify

from werkzeug.utils import secure_filename

from . import __version__
from .config import Config
from .cli import dump_json

MAX_UPLOAD_SIZE = 16 * 1024 * 1024  # 16MB max upload


def create_app(config: Optional[Config] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Dump configuration (bundled config.json when omitted)
    """
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = MAX_UPLOAD_SIZE
    dump_config = config if config is not None else Config.load(None)

    @app.route('/api/health')
    def health():
        """Liveness probe."""
        return jsonify({'status': 'ok', 'version': __version__})

    @app.route('/api/dump', methods=['POST'])
    def dump():
        """Decode an uploaded file (multipart field 'file' or raw body)."""
        filename = None
        if 'file' in request.files:
            upload = request.files['file']
            filename = secure_filename(upload.filename or '') or None
            data = upload.read()
        else:
            data = request.get_data()

        if not data:
            return jsonify({'error': 'No file provided'}), 400

        doc = dump_json(data, dump_config)
        result = doc.to_dict()
        result['Filename'] = filename
        status = 422 if doc.Error is not None else 200
        return jsonify(result), status

    @app.errorhandler(413)
    def too_large(_error):
        return jsonify({'error': f'File exceeds {MAX_UPLOAD_SIZE // (1024*1024)}MB limit'}), 413

    return app


def main():
    """Run the development server."""
    print("=" * 50)
    print("OMF Dumper Server")
    print("=" * 50)
    print("Starting server on http://0.0.0.0:5000")
    print("=" * 50)

    create_app().run(host='0.0.0.0', port=5000, debug=False, threaded=True)


if __name__ == '__main__':
    main()
