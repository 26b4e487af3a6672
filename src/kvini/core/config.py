from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from kvini.core.errors import ConfigError
from kvini.core.models import LoadConfig, OutputConfig

# Python 3.11+ has tomllib; for 3.9/3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


# Repo-local config (closest one in parent chain wins)
DEFAULT_REPO_CONFIG_FILES = (
    ".kvini/config.toml",
    ".kvini.toml",
)

# Global config (applies on this machine for all runs)
DEFAULT_GLOBAL_CONFIG_FILES = (
    "~/.config/kvini/config.toml",
    "~/.kvini/config.toml",
)


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8", errors="replace"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid config file: {path}: {e}") from e
    if not isinstance(data, dict):
        return {}
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge override into base (dict-only). Lists/scalars are replaced.
    """
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)  # type: ignore[arg-type]
        else:
            out[k] = v
    return out


def _section(merged: Dict[str, Any], name: str) -> Dict[str, Any]:
    d = merged.get(name) or {}
    return d if isinstance(d, dict) else {}


def find_repo_config(start_dir: Path) -> Optional[Path]:
    cur = start_dir.resolve()
    for parent in [cur, *cur.parents]:
        for rel in DEFAULT_REPO_CONFIG_FILES:
            p = parent / rel
            if p.is_file():
                return p
    return None


def find_global_config() -> Optional[Path]:
    for raw in DEFAULT_GLOBAL_CONFIG_FILES:
        p = Path(raw).expanduser()
        if p.is_file():
            return p
    return None


@dataclass(frozen=True)
class LoadedConfig:
    load: LoadConfig
    output: OutputConfig
    global_path: Optional[Path]
    repo_path: Optional[Path]


def load_tool_config(
    start_dir: Path,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> LoadedConfig:
    """
    Precedence (lowest -> highest):
      defaults (LoadConfig, OutputConfig) ->
      global config ->
      repo config (closest) ->
      cli_overrides
    """
    cli_overrides = cli_overrides or {}

    global_path = find_global_config()
    repo_path = find_repo_config(start_dir)

    merged: Dict[str, Any] = {}
    if global_path:
        merged = _deep_merge(merged, _read_toml(global_path))
    if repo_path:
        merged = _deep_merge(merged, _read_toml(repo_path))

    # CLI overrides are in the same shape as TOML, None means "not given"
    for name, values in cli_overrides.items():
        given = {k: v for k, v in (values or {}).items() if v is not None}
        merged = _deep_merge(merged, {name: given})

    try:
        load = LoadConfig.model_validate(_section(merged, "load"))
        output = OutputConfig.model_validate(_section(merged, "output"))
    except ValidationError as e:
        sources = ", ".join(str(p) for p in (global_path, repo_path) if p) or "command line"
        raise ConfigError(f"invalid settings in {sources}: {e}") from e

    return LoadedConfig(
        load=load,
        output=output,
        global_path=global_path,
        repo_path=repo_path,
    )
