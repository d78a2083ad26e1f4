"""
Central configuration for engine tunables, display and logging.
Pydantic models give type-safe configuration management.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
VALID_DIFFICULTIES = ['easy', 'medium', 'hard']


class EngineSettings(BaseModel):
    """Search engine configuration settings."""

    medium_max_depth: int = Field(default=5, ge=1, le=9, description="Ply cutoff for Medium depth-limited minimax")
    medium_search_probability: float = Field(default=0.80, ge=0.0, le=1.0, description="Chance Medium searches instead of playing randomly")
    win_base: int = Field(default=100, ge=10, description="Base score of a won terminal position")
    heuristic_line_weight: int = Field(default=3, ge=0, description="Weight of each open two-in-a-row line")
    default_difficulty: str = Field(default="hard", description="Difficulty used when none is given")

    @field_validator('medium_max_depth', 'win_base', 'heuristic_line_weight', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)

    @field_validator('medium_search_probability', mode='before')
    @classmethod
    def validate_float_fields(cls, v):
        return float(v)

    @field_validator('default_difficulty', mode='before')
    @classmethod
    def validate_difficulty(cls, v):
        v_lower = str(v).lower()
        if v_lower not in VALID_DIFFICULTIES:
            raise ValueError(f"default_difficulty must be one of {VALID_DIFFICULTIES}")
        return v_lower


class UISettings(BaseModel):
    """Text front end display settings."""

    use_color: bool = Field(default=True, description="Enable colored terminal output")
    show_indices: bool = Field(default=True, description="Show row/column indices around the board")

    @field_validator('use_color', 'show_indices', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ('1', 'true', 'yes', 'on')
        return bool(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")
        return v_upper


class TicTacToeConfig(BaseModel):
    """Main configuration model for the tic-tac-toe engine."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    def __init__(self, **data):
        super().__init__(**data)
        # Auto-detect terminal capabilities
        try:
            if not sys.stdout.isatty():
                self.ui.use_color = False
        except (AttributeError, OSError, ValueError):
            self.ui.use_color = False

    @classmethod
    def from_env(cls) -> 'TicTacToeConfig':
        """Create configuration from environment variables."""
        return cls(
            engine=EngineSettings(
                medium_max_depth=os.getenv('TICTACTOE_MEDIUM_DEPTH', '5'),
                medium_search_probability=os.getenv('TICTACTOE_MEDIUM_SEARCH_PROB', '0.80'),
                default_difficulty=os.getenv('TICTACTOE_DIFFICULTY', 'hard'),
            ),
            ui=UISettings(
                use_color=os.getenv('TICTACTOE_COLOR', 'true'),
                show_indices=os.getenv('TICTACTOE_INDICES', 'true'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('TICTACTOE_LOG_LEVEL', 'WARNING'),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'engine': self.engine.model_dump(),
            'ui': self.ui.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'TicTacToeConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            engine=EngineSettings(**data.get('engine', {})),
            ui=UISettings(**data.get('ui', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary, re-validating each section."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[TicTacToeConfig] = None


def get_config() -> TicTacToeConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = TicTacToeConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> TicTacToeConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = TicTacToeConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_engine_settings() -> EngineSettings:
    """Get engine configuration settings."""
    return get_config().engine


def get_ui_settings() -> UISettings:
    """Get UI configuration settings."""
    return get_config().ui


def get_logging_settings() -> LoggingSettings:
    """Get logging configuration settings."""
    return get_config().logging


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once, controlled by env var TICTACTOE_LOG_LEVEL."""
    if getattr(setup_logging, "_configured", False):
        return
    name = (level or get_logging_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format=LOG_FORMAT,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
