"""
Configuration Module for Invoice Intake.

settings.yaml holds every tunable of the intake: window sizes and caps of
the extraction heuristics, the OCR fallback threshold, Tesseract options,
form and store settings. Relative entries under ``paths`` are taken from
the project root.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

PROJECT_ROOT = Path(__file__).parent.parent


class ConfigurationManager:
    """
    Process-wide view of settings.yaml.

    The first instantiation loads the file; later ones return the same
    object and ignore their argument until reset() is called.

    Example:
        >>> ConfigurationManager().get("extraction.vendor.window")
        600
        >>> ConfigurationManager().get("paths.log_file")
        '/srv/invoice-intake/logs/invoice_intake.log'
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Args:
            config_path: Settings file to load. Defaults to the
                settings.yaml next to this module.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            yaml.YAMLError: If the settings file is not valid YAML.
        """
        if self._initialized:
            return

        self.config_path = Path(config_path) if config_path else Path(__file__).parent / "settings.yaml"
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            self._config = yaml.safe_load(f) or {}

        self._resolve_paths()
        self._initialized = True

    def _resolve_paths(self) -> None:
        """Anchor relative ``paths.*`` entries at the project root."""
        for key, value in (self._config.get('paths') or {}).items():
            if value and not Path(value).is_absolute():
                self._config['paths'][key] = str(PROJECT_ROOT / value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as "ocr.tesseract.lang".

        Returns:
            The value, or ``default`` when any part of the key is missing.
        """
        value = self._config
        try:
            for part in key.split('.'):
                value = value[part]
            return value
        except (KeyError, TypeError):
            return default

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings; the next instantiation reloads."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``ConfigurationManager().get(key, default)``."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
