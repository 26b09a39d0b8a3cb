"""
Ripeness Routes
Ready-date estimation with best-effort AI advice, plus the rule listing
"""

from __future__ import annotations
import logging

from flask import Blueprint, current_app, jsonify, request

from errors import RequestValidationError

logger = logging.getLogger(__name__)

ripeness_bp = Blueprint('ripeness', __name__, url_prefix='/api')


def get_pipeline():
    return current_app.config['pipeline']


@ripeness_bp.route('/ripeness', methods=['POST'])
def estimate_ripeness():
    """
    Estimate the ready date for an item.

    Expected JSON body:
    {
        "sku": "banana",
        "receivedAt": "2024-01-01",
        "storage": "room" | "cooldark" | "vegroom" | "fridge",
        "climate": "cold" | "normal" | "hot",
        "issues": ["too firm"],
        "advice": true
    }
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'ok': False, 'error': 'No data provided'}), 400
    if not isinstance(data, dict):
        return jsonify({'ok': False, 'error': 'Request body must be a JSON object'}), 400

    try:
        pipeline = get_pipeline()
        result = pipeline.estimate_payload(data, use_advisor=data.get('advice', True) is not False)
    except RequestValidationError as e:
        return jsonify({'ok': False, 'error': e.message}), 400
    except Exception:  # pylint: disable=broad-except
        logger.exception("[Ripeness] Unexpected error while estimating")
        return jsonify({'ok': False, 'error': 'Internal server error'}), 500

    return jsonify(result.to_dict())


@ripeness_bp.route('/fruit-rules', methods=['GET'])
def list_fruit_rules():
    """List known items, sorted by category then name"""
    rules = get_pipeline().repository.list_rules()
    return jsonify({'rules': [rule.to_public_dict() for rule in rules]})
