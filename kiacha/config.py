"""Kiacha Configuration - Settings for HeartCore and Supreme Cognition.

Handles loading and accessing configuration for:
- Emotion engine (personality, decay, history size)
- Domain routing (context memory, confidence normalization)
- Cognition and fusion history sizes
- Logging settings
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class EmotionConfig:
    """Configuration for the emotion engine."""

    personality: str = "balanced"
    history_size: int = 1000
    decay_rate: float = 0.02
    decay_target: float = 0.5
    attachment_increment: float = 0.02
    initial_attachment: float = 0.3


@dataclass
class RoutingConfig:
    """Configuration for the domain classifier."""

    context_size: int = 100
    confidence_divisor: float = 3.0
    multi_domain_ceiling: float = 0.9
    context_confidence: float = 0.5


@dataclass
class CognitionConfig:
    """Configuration for the cognition engine."""

    history_size: int = 500


@dataclass
class FusionConfig:
    """Configuration for the fusion engine."""

    history_size: int = 500
    exploratory_questions: int = 2


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build a config section from a dict, ignoring unknown keys."""
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in (data or {}).items() if k in known})


def _section_dict(section) -> Dict[str, Any]:
    return {f.name: getattr(section, f.name) for f in fields(section)}


@dataclass
class KiachaConfig:
    """Complete configuration."""

    emotion: EmotionConfig = field(default_factory=EmotionConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    cognition: CognitionConfig = field(default_factory=CognitionConfig)
    fusion: FusionConfig = field(default_factory=FusionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "emotion": _section_dict(self.emotion),
            "routing": _section_dict(self.routing),
            "cognition": _section_dict(self.cognition),
            "fusion": _section_dict(self.fusion),
            "logging": _section_dict(self.logging),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KiachaConfig":
        """Create from dictionary."""
        return cls(
            emotion=_section(EmotionConfig, data.get("emotion")),
            routing=_section(RoutingConfig, data.get("routing")),
            cognition=_section(CognitionConfig, data.get("cognition")),
            fusion=_section(FusionConfig, data.get("fusion")),
            logging=_section(LoggingConfig, data.get("logging")),
        )


# =============================================================================
# Loading Functions
# =============================================================================

_default_config: Optional[KiachaConfig] = None
_config_search_paths: List[Path] = [
    Path.home() / ".kiacha" / "config.yaml",
    Path.home() / ".config" / "kiacha" / "config.yaml",
    Path("kiacha_config.yaml"),
    Path("config/kiacha.yaml"),
]


def load_config(path: Optional[Path] = None) -> KiachaConfig:
    """Load configuration from file.

    Args:
        path: Explicit config path (optional)

    Returns:
        Loaded configuration, or defaults if nothing usable was found
    """
    global _default_config

    config_path = Path(path) if path else None
    if not config_path:
        for search_path in _config_search_paths:
            if search_path.exists():
                config_path = search_path
                break

    if config_path and config_path.exists():
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
            config = KiachaConfig.from_dict(data or {})
            logger.info(f"Loaded config from {config_path}")
            _default_config = config
            return config
        except (OSError, yaml.YAMLError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")

    config = KiachaConfig()
    _default_config = config
    return config


def get_config() -> KiachaConfig:
    """Get the current configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config


def save_config(config: KiachaConfig, path: Optional[Path] = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        path: Path to save to (defaults to ~/.kiacha/config.yaml)
    """
    save_path = Path(path) if path else Path.home() / ".kiacha" / "config.yaml"
    save_path.parent.mkdir(parents=True, exist_ok=True)

    with open(save_path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False)

    logger.info(f"Saved config to {save_path}")
    return save_path
