"""
Configuration management for the FEC module.

Handles code definitions, logging settings, presets, and persistence.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..fec.bch import MAX_CODEWORD_LENGTH, BCHConfig, EncodingType

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigValidationError(ValueError):
    """Raised when configuration values are invalid."""

    pass


@dataclass
class CodeConfig:
    """Serializable BCH code definition."""

    encoding: str = "prefix"  # "prefix" (systematic) or "factor"
    generator: int = 0x769  # x^10 + x^9 + x^8 + x^6 + x^5 + x^3 + 1
    check_polynomial: Optional[int] = 0x25  # x^5 + x^2 + 1
    n: int = 31
    k: int = 21
    t: int = 2

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate field ranges; consistency is checked by BCHConfig."""
        valid_encodings = tuple(e.value for e in EncodingType)
        if self.encoding not in valid_encodings:
            raise ConfigValidationError(
                f"Invalid encoding: {self.encoding}. "
                f"Must be one of {valid_encodings}"
            )
        if not (1 <= self.n <= MAX_CODEWORD_LENGTH):
            raise ConfigValidationError(
                f"n must be between 1 and {MAX_CODEWORD_LENGTH}, got {self.n}"
            )
        if not (1 <= self.k <= self.n):
            raise ConfigValidationError(
                f"k must be between 1 and n ({self.n}), got {self.k}"
            )
        if self.t < 0:
            raise ConfigValidationError(f"t must be non-negative, got {self.t}")
        if self.generator <= 0:
            raise ConfigValidationError(
                f"generator must be positive, got {self.generator}"
            )
        if self.check_polynomial is not None and self.check_polynomial <= 1:
            raise ConfigValidationError(
                f"check_polynomial must be greater than 1, got {self.check_polynomial}"
            )

    def to_bch_config(self) -> BCHConfig:
        """
        Build the immutable codec configuration.

        Raises:
            CodeConfigurationError: If n, k and the generator are inconsistent
        """
        return BCHConfig(
            encoding=EncodingType(self.encoding),
            generator=self.generator,
            check_polynomial=self.check_polynomial,
            n=self.n,
            k=self.k,
            t=self.t,
        )


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    level: str = "WARNING"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    def __post_init__(self) -> None:
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ConfigValidationError(
                f"level must be one of {LOG_LEVELS}, got {self.level}"
            )

    def apply(self) -> None:
        """Configure the root logger."""
        logging.basicConfig(level=getattr(logging, self.level), format=self.format)


@dataclass
class FECConfig:
    """Main configuration container."""

    code: CodeConfig = field(default_factory=CodeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FECConfig":
        """Create configuration from dictionary."""
        config = cls()

        if "code" in data:
            code = dict(data["code"])
            for key in ("generator", "check_polynomial"):
                # Allow "0x769" / "0b100101" strings in hand-written files
                if isinstance(code.get(key), str):
                    code[key] = int(code[key], 0)
            config.code = CodeConfig(**code)

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def save(self, path: str) -> bool:
        """Save configuration to JSON file.

        Args:
            path: File path to save configuration to

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            with open(path, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            logger.info(f"Configuration saved to {path}")
            return True
        except (OSError, IOError) as e:
            logger.error(f"Failed to save configuration to {path}: {e}")
            return False
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize configuration: {e}")
            return False

    @classmethod
    def load(cls, path: str) -> Optional["FECConfig"]:
        """Load configuration from JSON file.

        Args:
            path: File path to load configuration from

        Returns:
            FECConfig instance or None if loading failed
        """
        try:
            with open(path, "r") as f:
                data = json.load(f)
            config = cls.from_dict(data)
            logger.info(f"Configuration loaded from {path}")
            return config
        except FileNotFoundError:
            logger.warning(f"Configuration file not found: {path}")
            return None
        except (OSError, IOError) as e:
            logger.error(f"Failed to read configuration from {path}: {e}")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in configuration file {path}: {e}")
            return None
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Invalid configuration format in {path}: {e}")
            return None

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get default configuration file path."""
        config_dir = Path.home() / ".config" / "sdr_fec"
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir / "config.json"

    def save_default(self) -> None:
        """Save to default configuration path."""
        self.save(str(self.get_default_config_path()))

    @classmethod
    def load_default(cls) -> "FECConfig":
        """Load from default configuration path, or create new if not found or invalid."""
        path = cls.get_default_config_path()
        if path.exists():
            config = cls.load(str(path))
            if config is not None:
                return config
            logger.warning("Using default configuration due to load failure")
        return cls()


# Preset code definitions
PRESETS: Dict[str, CodeConfig] = {
    # POCSAG pager codewords: systematic BCH(31,21)
    "pocsag": CodeConfig(),
    "pocsag_factor": CodeConfig(encoding="factor"),
    "bch_7_4": CodeConfig(
        encoding="prefix", generator=0xB, check_polynomial=0xB, n=7, k=4, t=1
    ),
    "bch_15_7": CodeConfig(
        encoding="prefix", generator=0x1D1, check_polynomial=0x13, n=15, k=7, t=2
    ),
    "bch_15_5": CodeConfig(
        encoding="prefix", generator=0x537, check_polynomial=0x13, n=15, k=5, t=3
    ),
}


def get_preset(name: str) -> Optional[CodeConfig]:
    """Get a copy of a preset code definition by name."""
    preset = PRESETS.get(name)
    if preset is None:
        return None
    return CodeConfig(**asdict(preset))


def list_presets() -> List[str]:
    """List available preset names."""
    return list(PRESETS.keys())
