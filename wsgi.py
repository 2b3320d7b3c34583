"""
WSGI entry point - `gunicorn wsgi:app`

Startup is fatal on missing configuration or an unreachable document store.
"""

import logging
import os
import sys
from sqlalchemy.exc import SQLAlchemyError
from app import create_app
from config import ConfigurationError
from utils.data import DocumentStoreError

logger = logging.getLogger('portfolio')


def build_app():
    """Create the application or terminate the process"""
    try:
        return create_app()
    except ConfigurationError as e:
        logger.critical(f"FATAL ERROR: {str(e)}")
        sys.exit(1)
    except (DocumentStoreError, SQLAlchemyError) as e:
        logger.critical(f"FATAL ERROR: document store unavailable: {str(e)}")
        sys.exit(1)


logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'))

# Create app instance for gunicorn
app = build_app()

if __name__ == '__main__':
    env = os.environ.get('FLASK_ENV', 'development')
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 3000)),
        debug=(env == 'development')
    )
