"""Settings selection.

``APP_ENV`` names the environment; each environment is a flat module in this
package (``config.development``, ``config.production``, ``config.testing``).
"""
import importlib
import os
from types import ModuleType

DEFAULT_ENV = "development"

# accepted spellings -> module name
_ENV_ALIASES = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module(env: str | None = None) -> str:
    name = (env or os.getenv("APP_ENV") or DEFAULT_ENV).strip().lower()
    return f"config.{_ENV_ALIASES.get(name, DEFAULT_ENV)}"


def load_settings(env: str | None = None) -> ModuleType:
    return importlib.import_module(get_settings_module(env))
