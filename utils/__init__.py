"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import admin_required
from .data import (
    DocumentStoreError,
    get_default_portfolio_data,
    normalize_document,
    load_seed_document,
    fetch_document,
    persist_document
)
from .cache import PortfolioCache, DocumentNotLoadedError, get_portfolio_cache
from .assets import AssetManager, AssetUploadError, DeleteOutcome, extract_public_id, get_asset_manager
from .identifiers import ById, ByPosition, parse_position, resolve_reference, find_record
from .security import get_client_ip, get_admin_credentials, verify_password, check_admin_login

__all__ = [
    # Decorators
    'admin_required',

    # Data
    'DocumentStoreError',
    'get_default_portfolio_data',
    'normalize_document',
    'load_seed_document',
    'fetch_document',
    'persist_document',

    # Cache
    'PortfolioCache',
    'DocumentNotLoadedError',
    'get_portfolio_cache',

    # Assets
    'AssetManager',
    'AssetUploadError',
    'DeleteOutcome',
    'extract_public_id',
    'get_asset_manager',

    # Identifiers
    'ById',
    'ByPosition',
    'parse_position',
    'resolve_reference',
    'find_record',

    # Security
    'get_client_ip',
    'get_admin_credentials',
    'verify_password',
    'check_admin_login',
]
