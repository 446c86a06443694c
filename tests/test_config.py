from __future__ import annotations

import pytest

from time_ms_conversions.config import ConversionConfig, load_config
from time_ms_conversions.parse.massaging import TzMassaging


def test_load_config_missing_file_uses_defaults(tmp_path) -> None:
    cfg = load_config(tmp_path / "missing.yaml")

    assert cfg == ConversionConfig()
    assert cfg.policy is TzMassaging.COND_ADD_TZ_UTC
    assert cfg.zulu is True


def test_load_config_reads_sections(tmp_path) -> None:
    path = tmp_path / "tms.yaml"
    path.write_text("parse:\n  policy: has_tz\nformat:\n  zulu: 'off'\n", encoding="utf-8")

    cfg = load_config(path)

    assert cfg.policy is TzMassaging.HAS_TZ
    assert cfg.zulu is False


def test_load_config_ignores_non_mapping_sections(tmp_path) -> None:
    path = tmp_path / "tms.yaml"
    path.write_text("parse: local_tz\nformat: [1, 2]\nextra: 1\n", encoding="utf-8")

    assert load_config(path) == ConversionConfig()


def test_load_config_rejects_non_mapping_document(tmp_path) -> None:
    path = tmp_path / "tms.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping object"):
        load_config(path)


def test_load_config_rejects_unknown_policy(tmp_path) -> None:
    path = tmp_path / "tms.yaml"
    path.write_text("parse:\n  policy: guess\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Unknown tz massaging policy"):
        load_config(path)
