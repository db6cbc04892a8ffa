"""Door status API endpoints."""
import logging
from flask import Blueprint, current_app, jsonify, request
from chicken_door.models.door_status import DoorStatus, InvalidDoorStatus
from chicken_door.services.status_gateway import StatusGateway, Unauthorized
from chicken_door.storage.status_store import StatusStoreError

logger = logging.getLogger(__name__)

door_bp = Blueprint('door', __name__)

ACCESS_KEY_HEADER = 'x-access-key'
GATEWAY_EXTENSION = 'chicken_door.gateway'


def _gateway() -> StatusGateway:
    return current_app.extensions[GATEWAY_EXTENSION]


def _error(message: str, status_code: int):
    return jsonify({
        'success': False,
        'error': message
    }), status_code


@door_bp.route('/', methods=['GET'])
def home():
    return "Oh, Chicken, Chicken, you can't roost too high for me"


@door_bp.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'service': 'chicken-door'
    }), 200


@door_bp.route('/get_door_status', methods=['GET'])
def get_door_status():
    """Get the current door status."""
    logger.info("GET | /get_door_status")
    gateway = _gateway()

    try:
        gateway.authorize(request.headers.get(ACCESS_KEY_HEADER))
    except Unauthorized as e:
        return _error(str(e), 401)

    try:
        status = gateway.read_status()
    except StatusStoreError as e:
        logger.error(f"Error reading door status: {e}")
        return _error('Door status unavailable', 503)

    return jsonify(status.to_dict()), 200


@door_bp.route('/update_door_status', methods=['PUT'])
def update_door_status():
    """Replace the door status (manual override or execution confirmation)."""
    logger.info("PUT | /update_door_status")
    gateway = _gateway()

    try:
        gateway.authorize(request.headers.get(ACCESS_KEY_HEADER))
    except Unauthorized as e:
        return _error(str(e), 401)

    data = request.get_json(silent=True)
    if data is None:
        return _error('Request body must be a JSON door status', 422)

    try:
        new_status = DoorStatus.from_dict(data, strict=True)
    except InvalidDoorStatus as e:
        return _error(str(e), 422)

    try:
        stored = gateway.replace_status(new_status)
    except StatusStoreError as e:
        logger.error(f"Error writing door status: {e}")
        return _error('Door status unavailable', 503)

    return jsonify(stored.to_dict()), 200
