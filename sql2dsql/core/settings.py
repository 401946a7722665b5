"""
User settings for sql2dsql, persisted as JSON in the settings directory.
"""
from dataclasses import asdict, dataclass, fields
from pathlib import Path
import json
from typing import Any

SETTINGS_FILE = "settings.json"
DEFAULT_BACKEND_URL = "http://localhost:3000/to_dsql"
DEFAULT_SOURCE = "SELECT * FROM table1 WHERE element > 30;"
DEFAULT_TIMEOUT = 10.0

@dataclass
class Settings:
    """Configuration settings for sql2dsql."""
    backend_url: str = DEFAULT_BACKEND_URL
    timeout: float = DEFAULT_TIMEOUT  # seconds per request, must be > 0
    retries: int = 3  # attempts for connection errors/timeouts
    retry_delay: float = 1.5
    status_reset_seconds: float = 3.0  # status line falls back to "Ready"
    default_source: str = DEFAULT_SOURCE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Settings':
        """Hydrate Settings from a dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in valid_keys}
        for key in ("timeout", "retry_delay", "status_reset_seconds"):
            if key in filtered_data:
                filtered_data[key] = float(filtered_data[key])
        if filtered_data.get("timeout", DEFAULT_TIMEOUT) <= 0:
            # requests rejects a zero or negative timeout
            del filtered_data["timeout"]
        if "retries" in filtered_data:
            filtered_data["retries"] = int(filtered_data["retries"])
        return cls(**filtered_data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize Settings to a dictionary."""
        return asdict(self)

    def update(self, key: str, value: str) -> None:
        """
        Set one field from a string (CLI `--set key=value`, form fields).
        Raises KeyError for unknown keys and ValueError for bad values.
        """
        names = {f.name for f in fields(self)}
        if key not in names:
            raise KeyError(f"Unknown setting: {key}")
        current = getattr(self, key)
        if isinstance(current, bool):
            new_value: Any = value.strip().lower() in ("1", "true", "yes", "on")
        elif isinstance(current, int):
            new_value = int(value)
        elif isinstance(current, float):
            new_value = float(value)
        else:
            new_value = value
        if isinstance(new_value, (int, float)) and new_value < 0:
            raise ValueError(f"{key} cannot be negative")
        if key == "timeout" and new_value <= 0:
            raise ValueError("timeout must be greater than 0")
        if key == "retries" and new_value < 1:
            raise ValueError("retries must be at least 1")
        if key == "backend_url" and not str(new_value).startswith(("http://", "https://")):
            raise ValueError("backend_url must start with http:// or https://")
        setattr(self, key, new_value)

# --- Persistence functions ---

def load_settings(settings_dir: Path) -> Settings:
    """Load settings from a JSON file in the settings directory."""
    path = settings_dir / SETTINGS_FILE
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Settings.from_dict(data)
    except (json.JSONDecodeError, TypeError, ValueError, AttributeError):
        # Corrupted or hand-edited file: fall back to defaults
        return Settings()

def save_settings(settings_dir: Path, settings: Settings) -> Path:
    """Save settings to a JSON file in the settings directory."""
    settings_dir.mkdir(parents=True, exist_ok=True)
    path = settings_dir / SETTINGS_FILE
    data = settings.to_dict()
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
