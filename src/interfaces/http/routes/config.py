import logging
from flask import Blueprint, current_app, jsonify

from src.settings import MAX_RESULT_LIMIT

logger = logging.getLogger(__name__)

config_bp = Blueprint('config_bp', __name__, url_prefix='/api')


@config_bp.route('/config/public-config', methods=['GET'])
def get_public_config():
    """Expose deployment feature flags for frontend gating."""
    settings = current_app.extensions['settings']
    payload = {
        'oauthConfigured': settings.oauth_configured,
        'promptParsingEnabled': current_app.extensions.get('prompt_interpreter') is not None,
        'limits': {
            'bpmSearch': settings.bpm_search_default_limit,
            'promptSearch': settings.prompt_search_default_limit,
            'max': MAX_RESULT_LIMIT,
        },
    }
    return jsonify(payload), 200
