"""
Default paths for configuration.
"""
from pathlib import Path
from platformdirs import user_data_dir

APP_NAME = 'sql2dsql'

def default_settings_dir() -> Path:
    """Get the default settings directory for sql2dsql."""
    return Path(user_data_dir(APP_NAME)).expanduser().resolve()
