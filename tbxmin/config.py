"""
Codec configuration.

Settings can be built in code or loaded from YAML:

    codec:
      indent: "    "
      xml_declaration: true
      entry_comment: "terminological entry"
      strict: false
      accept_legacy_names: true
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

logger = logging.getLogger(__name__)


@dataclass
class CodecConfig:
    """Options for parsing and serializing TBX-Min."""

    # Serialization
    indent: str = "  "
    xml_declaration: bool = True
    entry_comment: Optional[str] = None  # comment written after each <entry>

    # Parsing
    strict: bool = False  # unknown elements raise StructuralError
    accept_legacy_names: bool = True  # termEntry/langSet/tig
    chunk_size: int = 64 * 1024

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodecConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown codec settings: {', '.join(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(yaml_path: Path) -> CodecConfig:
    """
    Load codec settings from a YAML file.

    Settings may sit under a top-level ``codec`` key or at the top level.
    An empty file yields the defaults.

    Raises:
        FileNotFoundError: if ``yaml_path`` does not exist
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"YAML file not found: {yaml_path}")

    logger.info(f"Loading codec config from: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Codec config must be a mapping, got {type(data).__name__}")

    section = data.get("codec", data)
    return CodecConfig.from_dict(section or {})


__all__ = ["CodecConfig", "load_config"]
