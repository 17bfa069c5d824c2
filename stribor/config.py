"""Configuration: defaults, ~/.stribor.yaml, environment, flags.

A ``Config`` is built once in ``stribor.cli.main`` and passed to every
command.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigReadError, ConfigWriteError
from .models import CONFIG_FILE_NAME, DEFAULT_DIR_NAME

ENV_DIR_HOME = "STRIBOR_DIRHOME"
ENV_DIR_NAME = "STRIBOR_DIRNAME"


def default_config_path() -> Path:
    return Path.home() / CONFIG_FILE_NAME


@dataclass(frozen=True)
class Config:
    dir_home: Path
    dir_name: str = DEFAULT_DIR_NAME
    config_file: Optional[Path] = None

    @property
    def directory(self) -> Path:
        """The bookmark repository: ``<dir_home>/.<dir_name>``."""
        return self.dir_home / f".{self.dir_name}"

    def to_yaml_dict(self) -> Dict[str, str]:
        return {"dirHome": str(self.dir_home), "dirName": self.dir_name}


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigReadError(f"Using config file: {path}", exc) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigReadError(
            f"Using config file: {path}", ValueError("expected a mapping at top level")
        )
    return data


def load_config(
    config_path: Optional[str] = None,
    dir_home: Optional[str] = None,
    dir_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    default_path: Optional[Path] = None,
) -> Config:
    """Resolve the effective configuration.

    Precedence, highest first: explicit arguments (flags), environment,
    config file, defaults. An explicit ``config_path`` must exist; the
    default file is optional.
    """
    env = os.environ if env is None else env
    used: Optional[Path] = None
    data: Dict[str, Any] = {}
    if config_path:
        used = Path(config_path).expanduser()
        if not used.is_file():
            raise ConfigReadError(
                f"Using config file: {used}", FileNotFoundError("no such file")
            )
        data = _read_config_file(used)
    else:
        candidate = default_path or default_config_path()
        if candidate.is_file():
            used = candidate
            data = _read_config_file(candidate)

    home = dir_home or env.get(ENV_DIR_HOME) or data.get("dirHome") or str(Path.home())
    name = dir_name or env.get(ENV_DIR_NAME) or data.get("dirName") or DEFAULT_DIR_NAME
    return Config(dir_home=Path(str(home)).expanduser(), dir_name=str(name), config_file=used)


def save_config(config: Config, path: Optional[Path] = None) -> Optional[Path]:
    """Write ``config`` to ``path`` unless a file is already there.

    Returns the written path, or None when nothing was written.
    """
    path = path or default_config_path()
    if path.exists():
        return None
    try:
        path.write_text(
            yaml.safe_dump(config.to_yaml_dict(), default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
    except OSError as exc:
        raise ConfigWriteError(f"Cannot write config file {path}", exc) from exc
    return path
