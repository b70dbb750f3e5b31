# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from showlog.logging.init import reset_logging

HEADER = "Datum,Nazev,Soubor,Misto,Mesto,Hostovacka,StazenoZR,Zanry,Hodnoceni,Komentar"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("SHOWLOG_INPUT", "SHOWLOG_OUTPUT", "SHOWLOG_SOURCE"):
        monkeypatch.delenv(name, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_csv_text() -> str:
    return (
        f"{HEADER}\n"
        "2024-01-01,Hamlet,Troupe,Theatre,City,A,N,drama;tragedy,92,Great show\n"
        "2024-01-05,,Troupe,Theatre,City,N,N,drama,80,no title\n"
        "2024-02-14,\"Romeo, Julie\",Divadlo,Sál,Praha,n,yes,\"Činohra, romantika\",85%,\"Krásné \"\"kulisy\"\"\"\n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    f = temp_workdir / "data" / "shows.csv"
    f.write_text(sample_csv_text, encoding="utf-8")
    return f


@pytest.fixture()
def sample_config_yaml() -> str:
    return """input: data/shows.csv
output: out/site/shows.json
source: data/shows.csv
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "build.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
