"""
Configuration for the two tools.

Precedence: dataclass defaults < config file (YAML/JSON) < CLI options.

Default mutation rates are from Brodin et al. 2013,
doi:10.1371/journal.pone.0070388.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Literal, Optional, Type, TypeVar, Union
import json

import yaml

from ..exceptions import ConfigurationError
from .mutator import INSERTION_MODES

DEFAULT_SUBSTITUTION = 0.000057
DEFAULT_INSERTION = 0.000069
DEFAULT_DELETION = 0.0016

DEFAULT_DEPTH = 50.0
DEFAULT_LENGTH = 150

ConfigT = TypeVar("ConfigT", bound="_ConfigMixin")


class _ConfigMixin:
    """Dict/YAML/JSON round-tripping shared by the tool configs"""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict):
        if not isinstance(d, dict):
            raise ConfigurationError(f"Config must be a mapping, got {type(d).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {unknown}. Available: {sorted(known)}")
        return cls(**d)

    @classmethod
    def from_yaml(cls, path: str):
        with open(path, 'r') as f:
            d = yaml.safe_load(f)
        return cls.from_dict(d or {})

    def to_yaml(self, path: str):
        with open(path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_json(cls, path: str):
        with open(path, 'r') as f:
            d = json.load(f)
        return cls.from_dict(d)

    def to_json(self, path: str):
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def update(self, **overrides) -> None:
        """Apply overrides, skipping those left unset (None)"""
        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(self, key):
                raise ConfigurationError(f"Unknown config key: {key}")
            setattr(self, key, value)


@dataclass
class MutaConfig(_ConfigMixin):
    """In silico mutation parameters"""
    substitution: float = DEFAULT_SUBSTITUTION  # per-base probability
    insertion: float = DEFAULT_INSERTION
    deletion: float = DEFAULT_DELETION
    insertion_mode: Literal["drop", "insert"] = "drop"
    seed: Optional[int] = None
    threads: int = 1

    @property
    def identity(self) -> float:
        return 1.0 - self.substitution - self.insertion - self.deletion

    def validate(self) -> list:
        """Return a list of problems (empty if valid)"""
        problems = []
        for name in ("substitution", "insertion", "deletion"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                problems.append(f"{name} must be a number")
            elif not 0 <= value <= 1:
                problems.append(f"{name} must be in [0, 1]")
        if not problems and self.identity < -1e-9:
            problems.append(
                f"substitution + insertion + deletion must be <= 1 "
                f"(got {1.0 - self.identity:.6g})"
            )
        if self.insertion_mode not in INSERTION_MODES:
            problems.append(f"unknown insertion_mode: {self.insertion_mode}")
        if self.seed is not None and (not isinstance(self.seed, int) or self.seed < 0):
            problems.append("seed must be a non-negative integer")
        if not isinstance(self.threads, int) or self.threads < 0:
            problems.append("threads must be >= 0 (0 = auto)")
        return problems


@dataclass
class SonicatConfig(_ConfigMixin):
    """In silico sonication parameters"""
    depth: float = DEFAULT_DEPTH    # Poisson mean copies per window
    length: int = DEFAULT_LENGTH    # window length (bp)
    seed: Optional[int] = None

    def validate(self) -> list:
        """Return a list of problems (empty if valid)"""
        problems = []
        if not isinstance(self.depth, (int, float)) or isinstance(self.depth, bool):
            problems.append("depth must be a number")
        elif not self.depth > 0:
            problems.append("depth must be > 0")
        if not isinstance(self.length, int) or isinstance(self.length, bool) or self.length <= 0:
            problems.append("length must be a positive integer")
        if self.seed is not None and (not isinstance(self.seed, int) or self.seed < 0):
            problems.append("seed must be a non-negative integer")
        return problems


def load_config(cls: Type[ConfigT], path: Union[str, Path, None]) -> ConfigT:
    """
    Load a config from YAML (.yaml/.yml) or JSON; defaults when path is None.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    if path is None:
        return cls()

    path = Path(path)
    try:
        if path.suffix in ['.yaml', '.yml']:
            return cls.from_yaml(str(path))
        return cls.from_json(str(path))
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
