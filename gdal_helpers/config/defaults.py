# gdal_helpers/config/defaults.py
"""Default configuration values for the GDAL helpers."""

import os
from pathlib import Path

# Per-user state lives outside the installed package
USER_DIR = Path(os.getenv('GDAL_HELPERS_HOME') or Path.home() / '.gdal_helpers')
LOGS_DIR = Path(os.getenv('GDAL_HELPERS_LOGS_DIR') or USER_DIR / 'logs')

PATHS = {
    'user_dir': str(USER_DIR),
    'logs_dir': str(LOGS_DIR),
}

# GDAL runtime configuration applied by init_gdal()
GDAL = {
    # Directory holding GDAL's runtime data files (gcs.csv, header.dxf, ...).
    # Left unset, GDAL falls back to its compiled-in search path.
    'data_dir': os.getenv('GDAL_HELPERS_DATA_DIR') or None,
    'cache_max_mb': 512,
    'use_exceptions': True,
    'register_drivers': True,
    'install_error_handler': True,
    'config_options': {
        'GDAL_NUM_THREADS': 'ALL_CPUS',
    },
}

# In-memory (/vsimem/) datasets
VSIMEM = {
    'extension': '.tif',
}

LOGGING = {
    'level': os.getenv('GDAL_HELPERS_LOG_LEVEL', 'INFO'),
    'console': True,
    'show_context': True,
    # GDAL messages below this level stay out of the console
    'gdal_console_level': 'WARNING',
    'log_file': None,  # defaults to <logs_dir>/gdal_helpers.log when file logging is on
    'file': False,
    'use_json': True,
    'max_file_size': 10 * 1024 * 1024,  # 10MB
    'backup_count': 3,
}

# Coordinate transformation behaviour
SPATIAL = {
    'traditional_gis_order': False,
    'pretty_wkt': False,
}
