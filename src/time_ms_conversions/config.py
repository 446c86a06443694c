from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from time_ms_conversions.parse.massaging import TzMassaging

DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


@dataclass(frozen=True)
class ConversionConfig:
    policy: TzMassaging = TzMassaging.COND_ADD_TZ_UTC
    zulu: bool = True


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain mapping object: {path}")
    return data


def _section(cfg: dict, name: str) -> dict:
    return cfg.get(name, {}) if isinstance(cfg.get(name), dict) else {}


def _coerce_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "y", "on"}:
            return True
        if text in {"0", "false", "no", "n", "off"}:
            return False
    return default


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ConversionConfig:
    """Load CLI defaults from YAML; a missing file yields the built-in defaults."""
    cfg = _read_yaml(Path(path))
    parse_cfg = _section(cfg, "parse")
    format_cfg = _section(cfg, "format")

    defaults = ConversionConfig()
    policy_name = parse_cfg.get("policy")
    policy = defaults.policy if policy_name is None else TzMassaging.from_name(policy_name)
    return ConversionConfig(
        policy=policy,
        zulu=_coerce_bool(format_cfg.get("zulu"), default=defaults.zulu),
    )
