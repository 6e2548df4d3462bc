from __future__ import annotations

import os
from pathlib import Path

from idscan.config import load_env_file


def test_env_file_seeds_missing_variables_only(tmp_path: Path, monkeypatch) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "# comment",
                "IDSCAN_TEST_LANG='eng'",
                'export IDSCAN_TEST_KEY="ttx_customers"',
                "IDSCAN_TEST_KEEP=from-file",
                "not a pair",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.delenv("IDSCAN_TEST_LANG", raising=False)
    monkeypatch.delenv("IDSCAN_TEST_KEY", raising=False)
    monkeypatch.setenv("IDSCAN_TEST_KEEP", "from-env")

    assert load_env_file(tmp_path / "missing.env", env_path) == env_path

    assert os.environ["IDSCAN_TEST_LANG"] == "eng"
    assert os.environ["IDSCAN_TEST_KEY"] == "ttx_customers"
    assert os.environ["IDSCAN_TEST_KEEP"] == "from-env"
    monkeypatch.delenv("IDSCAN_TEST_LANG")
    monkeypatch.delenv("IDSCAN_TEST_KEY")


def test_no_env_file(tmp_path: Path) -> None:
    assert load_env_file(tmp_path / ".env") is None
