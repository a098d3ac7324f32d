from flask import Flask, jsonify, request
from passquality.config import acceptable_threshold, load_config, toplist_db_path
from passquality.evaluator import score
from passquality.toplists import LookupUnavailable, SQLiteLookup


def create_app(lookup=None, threshold=None):
    app = Flask(__name__)
    cfg = load_config()
    if lookup is None:
        lookup = SQLiteLookup(toplist_db_path(cfg))
    if threshold is None:
        threshold = acceptable_threshold(cfg)

    @app.route('/')
    def home():
        return jsonify({
            "message": "PassQuality API is running"
        })

    @app.route('/score', methods=['POST'])
    def score_route():
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({'error': "request body must be a JSON object"}), 400
        password = data.get('password')
        if not isinstance(password, str):
            return jsonify({'error': "'password' must be a string"}), 400
        try:
            report = score(password, lookup)
        except LookupUnavailable as e:
            app.logger.error("Known password lookup unavailable: %s", e)
            return jsonify({'error': 'known password lookup unavailable'}), 503
        result = report.to_dict()
        result['acceptable'] = report.is_acceptable(threshold)
        return jsonify(result)

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
