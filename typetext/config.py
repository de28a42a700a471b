"""Configuration management for the practice text generator."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CorpusConfig:
    """Configuration for the word source."""
    wordlist_file: Optional[str] = None
    quote_mode: bool = False  # each line is one unit, case kept


@dataclass
class SelectorConfig:
    """Configuration for the word selector pipeline."""
    numbers: bool = False
    number_chance: float = 0.15
    number_max: int = 9999
    punctuation: bool = False
    punctuation_chance: float = 0.15
    preserve_whitespace: bool = False


@dataclass
class Config:
    """Main configuration container."""
    num_words: int = 30
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    log_level: str = "INFO"
    log_json: bool = False

    def text_name(self) -> str:
        """Name of the text used for the practice session."""
        if self.corpus.wordlist_file:
            return f"custom file `{self.corpus.wordlist_file}`"
        return "stdin"


def _resolve_env_vars(value: Any) -> Any:
    """Resolve environment variables in string values."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        env_var = value[2:-1]
        resolved = os.environ.get(env_var, "")
        if not resolved:
            logger.warning(f"Environment variable {env_var} not set")
        return resolved
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(v) for v in value]
    return value


def _parse_selector_config(data: Dict) -> SelectorConfig:
    """Parse selector section, falling back to defaults for bad values."""
    defaults = SelectorConfig()
    selector = SelectorConfig(
        numbers=data.get("numbers", defaults.numbers),
        number_chance=float(data.get("number_chance", defaults.number_chance)),
        number_max=int(data.get("number_max", defaults.number_max)),
        punctuation=data.get("punctuation", defaults.punctuation),
        punctuation_chance=float(data.get("punctuation_chance", defaults.punctuation_chance)),
        preserve_whitespace=data.get("preserve_whitespace", defaults.preserve_whitespace),
    )

    for name in ("number_chance", "punctuation_chance"):
        value = getattr(selector, name)
        if not 0.0 <= value <= 1.0:
            fallback = getattr(defaults, name)
            logger.warning(f"Invalid {name} {value}, using {fallback}")
            setattr(selector, name, fallback)

    if selector.number_max <= 0:
        logger.warning(
            f"Invalid number_max {selector.number_max}, using {defaults.number_max}"
        )
        selector.number_max = defaults.number_max

    return selector


def load_config(config_path: str = "config.json") -> Config:
    """Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Parsed configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config file is invalid.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(path) as f:
            data = _resolve_env_vars(json.load(f))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")

    config = Config()

    if "corpus" in data:
        config.corpus = CorpusConfig(
            wordlist_file=data["corpus"].get("wordlist_file") or None,
            quote_mode=data["corpus"].get("quote_mode", False),
        )

    if "selector" in data:
        config.selector = _parse_selector_config(data["selector"])

    num_words = int(data.get("num_words", config.num_words))
    if num_words < 0:
        logger.warning(f"Invalid num_words {num_words}, using {config.num_words}")
    else:
        config.num_words = num_words

    config.log_level = data.get("log_level", "INFO")
    config.log_json = data.get("log_json", False)

    logger.info(f"Loaded configuration from {config_path}")
    return config


def create_default_config() -> Dict:
    """Create a default configuration dictionary."""
    return {
        "num_words": 30,
        "corpus": {
            "wordlist_file": None,
            "quote_mode": False
        },
        "selector": {
            "numbers": False,
            "number_chance": 0.15,
            "number_max": 9999,
            "punctuation": False,
            "punctuation_chance": 0.15,
            "preserve_whitespace": False
        },
        "log_level": "INFO",
        "log_json": False
    }
