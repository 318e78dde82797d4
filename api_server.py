#!/usr/bin/env python3
"""
Abbreviator REST API Server
Provides HTTP endpoints for editing abbreviations and rewriting content
"""

import logging
import time
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS

from abbreviator.core.config import AbbreviatorConfig, default_config
from abbreviator.core.content_filter import ContentFilter
from abbreviator.core.rewriter import ContentRewriter
from abbreviator.core.settings import SettingsService
from abbreviator.core.store import KeyValueStore, MemoryStore, YamlFileStore

logger = logging.getLogger(__name__)


def create_app(config: Optional[AbbreviatorConfig] = None,
               store: Optional[KeyValueStore] = None) -> Flask:
    """Create the Flask app around a settings store"""
    config = config or default_config

    if store is None:
        store = YamlFileStore(config.cache.store_path) if config.cache.store_path else MemoryStore()

    app = Flask(__name__)
    CORS(app)  # Enable CORS for browser-based settings screens

    settings = SettingsService(store, config.option_prefix)
    app.config["ABBREVIATOR_SETTINGS"] = settings

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint"""
        return jsonify({"status": "healthy", "message": "Abbreviator API is running"})

    @app.route('/api/abbreviations', methods=['GET'])
    def get_abbreviations():
        """Map of abbreviations to meanings for editing prior entries"""
        return jsonify(settings.abbreviation_map())

    @app.route('/api/abbreviations', methods=['POST'])
    def save_abbreviations():
        """Validate and save posted abbreviations and meanings"""
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"valid": False, "problems": ["Expected a JSON object"]}), 400

        validity = settings.save(data.get('abbreviations', []), data.get('meanings', []))

        status = 200 if validity.valid else 400
        return jsonify(validity.to_dict()), status

    @app.route('/api/rewrite', methods=['POST'])
    def rewrite_content():
        """Add <abbr> tags to posted content"""
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Expected a JSON object"}), 400

        content = data.get('content')

        if not isinstance(content, str):
            return jsonify({"error": "No content provided"}), 400

        registry = settings.load()
        content_id = data.get('content_id')

        if config.cache.enabled and content_id is not None:
            try:
                modified_at = float(data.get('modified_at', time.time()))
            except (TypeError, ValueError):
                return jsonify({"error": "modified_at must be a timestamp"}), 400

            content_filter = ContentFilter(store, registry, config.option_prefix)
            rewritten = content_filter.filter(
                content_id, content, modified_at, config.cache.watched_files
            )
            decision = content_filter.cached_decision(content_id)
        else:
            decision = ContentRewriter(registry).check(content)
            rewritten = decision.rewritten_content if decision.has_abbreviations else content

        return jsonify({
            "content": rewritten,
            "decision": {
                "has_abbreviations": decision.has_abbreviations if decision else False,
                "has_abbreviations_inside_tags": decision.has_abbreviations_inside_tags if decision else False,
                "tags_verified": decision.tags_verified if decision else True,
            }
        })

    return app


if __name__ == '__main__':
    logging.basicConfig(level=getattr(logging, default_config.log_level, logging.INFO))
    app = create_app()
    print("Starting Abbreviator API server...")
    app.run(host='0.0.0.0', port=5000, debug=default_config.debug)
