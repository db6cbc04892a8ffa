"""Chicken door service entry point."""
import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler
from flask import Flask
from flask_cors import CORS
from chicken_door.api import GATEWAY_EXTENSION, door_bp
from chicken_door.config.config import ConfigurationError, Settings, load_settings
from chicken_door.config.database import create_db_engine, create_session_factory
from chicken_door.decision_engine import DoorDecisionEngine
from chicken_door.scheduler.reconciliation_loop import ReconciliationLoop
from chicken_door.services import Almanac, StatusGateway
from chicken_door.storage import JsonFileStatusStore, SqlStatusStore, StatusStore, StatusStoreError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger('chicken_door')


def setup_logging(log_dir: str = './logs', level: str = 'INFO'):
    """Log to stdout and to an hourly rotated file in log_dir."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    os.makedirs(log_dir, exist_ok=True)
    file_handler = TimedRotatingFileHandler(os.path.join(log_dir, 'chicken.log'), when='H')
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(file_handler)


def build_status_store(settings: Settings) -> StatusStore:
    """
    Build the configured status store and make sure its source exists.
    
    Raises:
        ConfigurationError: If the status source is missing or unusable
    """
    if settings.status_backend == 'sql':
        source = settings.resolved_database_url()
        engine = create_db_engine(source)
        store = SqlStatusStore(create_session_factory(engine), engine=engine)
    else:
        source = settings.status_file
        store = JsonFileStatusStore(source)

    if not store.exists():
        raise ConfigurationError(f"Status source not found: {source}")

    try:
        store.initialize()
        store.read_status()
    except StatusStoreError as e:
        raise ConfigurationError(f"Status source unusable: {e}") from e
    logger.info(f"Found status source ({settings.status_backend} backend)")
    return store


def create_app(gateway: StatusGateway) -> Flask:
    """Create the Flask app serving the door status endpoints."""
    app = Flask(__name__)
    CORS(app, origins='*', methods=['GET', 'PUT'])
    app.extensions[GATEWAY_EXTENSION] = gateway
    app.register_blueprint(door_bp)
    return app


def main():
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.basicConfig(level='INFO', format=LOG_FORMAT)
        logger.critical(f"Invalid configuration: {e}. Terminating server")
        sys.exit(1)

    setup_logging(settings.log_dir, settings.log_level)
    logger.info("Hello, chickens! Rise and shine!")

    try:
        almanac = Almanac.from_file(settings.schedule_file)
        logger.info("✓ Found schedule")
        store = build_status_store(settings)
    except ConfigurationError as e:
        logger.critical(f"{e}. Terminating server")
        sys.exit(1)

    gateway = StatusGateway(store, settings.access_key, settings.lock_timeout_seconds)
    loop = ReconciliationLoop(
        gateway, almanac, DoorDecisionEngine(),
        interval_seconds=settings.interval_seconds,
        hour_offset=settings.hour_offset,
        daylight_grace_seconds=settings.daylight_grace_seconds,
    )

    app = create_app(gateway)
    loop.start()
    logger.info(f"Server listening on port {settings.port}")
    try:
        app.run(host=settings.host, port=settings.port, threaded=True)
    finally:
        loop.stop()


if __name__ == '__main__':
    main()
