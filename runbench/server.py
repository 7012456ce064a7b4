"""HTTP service under test for the HTTP benchmark."""
import json
import time
import logging

from flask import Flask, Response, jsonify, request

from .workloads.cpu import fibonacci

logger = logging.getLogger(__name__)

DEFAULT_CPU_N = 40


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_app(config=None) -> Flask:
    """Application factory for the benchmark server."""
    app = Flask(__name__)
    if config:
        app.config.update(config)

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'ok',
            'timestamp': _now_ms(),
        })

    @app.route('/hello', methods=['GET'])
    def hello():
        return Response('Hello World!', mimetype='text/plain')

    @app.route('/json', methods=['GET'])
    def json_payload():
        """Fixed-shape payload of 100 small records."""
        return jsonify({
            'message': 'Hello World!',
            'timestamp': _now_ms(),
            'data': [{'id': i, 'value': f'item-{i}'} for i in range(100)],
        })

    @app.route('/cpu/<n>', methods=['GET'])
    def cpu_task(n):
        """Recursive fibonacci of the path parameter."""
        try:
            n = int(n)
        except ValueError:
            n = DEFAULT_CPU_N
        # a zero parameter falls back like an unparsable one
        n = n or DEFAULT_CPU_N

        start = time.perf_counter()
        result = fibonacci(n)
        elapsed_ms = (time.perf_counter() - start) * 1000

        return jsonify({
            'input': n,
            'result': result,
            'time_ms': elapsed_ms,
        })

    @app.route('/data', methods=['POST'])
    def process_data():
        """Summarize an arbitrary JSON body."""
        data = request.get_json(silent=True)
        if not isinstance(data, (dict, list)):
            return jsonify({'error': 'Request body must be a JSON object or array'}), 400

        return jsonify({
            'received_count': len(data),
            'processed_at': _now_ms(),
            'summary': len(json.dumps(data, separators=(',', ':'))),
        })

    return app


def serve(host: str = '0.0.0.0', port: int = 3000) -> None:
    """Run the benchmark server until interrupted."""
    app = create_app()
    logger.info(f"Starting benchmark server on {host}:{port}")
    print(f"Python HTTP server running on port {port}")
    app.run(host=host, port=port, threaded=True)
