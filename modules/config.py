"""
Configuration settings for the Inventory SKU Updater
"""
import os

# UI Configuration
PAGE_TITLE = "Inventory SKU Updater"
MAX_PREVIEW_ROWS = 200
SUPPORTED_TYPES = ['csv', 'xlsx', 'xls']

# Accepted header labels, highest priority first (case/space-insensitive)
KEY_FIELD_CANDIDATES = ['product code/sku', 'sku', 'product code']
QUANTITY_FIELD_CANDIDATES = ['current stock level', 'stock level', 'inventory']

# Processing Configuration
DEFAULT_INCREMENT = 1

# Runtime parameters passed from the UI to the session layer.
# MIN_INCREMENT: None keeps the core permissive (negative increments allowed).
DEFAULT_PARAMS = {
    'MIN_INCREMENT': None,
}

# Logging
LOG_LEVEL = os.getenv("SKU_UPDATER_LOG_LEVEL", "INFO").upper()
