import json

from conftest import StubOracle
from seedpass import cli


class StubOracleFactory:
    oracle = None

    @classmethod
    def from_config(cls, cfg):
        return cls.oracle


def _use_stub(monkeypatch, oracle):
    StubOracleFactory.oracle = oracle
    monkeypatch.setattr(cli, "PwnedPasswordsOracle", StubOracleFactory)


def test_suggest_command(monkeypatch, capsys, tmp_path):
    oracle = StubOracle()
    _use_stub(monkeypatch, oracle)
    cfg = str(tmp_path / "missing.json")
    rc = cli.main(["--config", cfg, "suggest", "MyDogFido", "--length", "12", "--symbols", "--copies", "2"])
    assert rc == 0
    assert len(oracle.calls) == 2
    assert all(len(pw) == 12 for pw in oracle.calls)
    out = capsys.readouterr().out
    assert oracle.calls[0] in out

def test_suggest_requires_seed(monkeypatch, capsys, tmp_path):
    _use_stub(monkeypatch, StubOracle())
    rc = cli.main(["--config", str(tmp_path / "missing.json"), "suggest", "   "])
    assert rc == 1
    assert "SeedRequired" in capsys.readouterr().out

def test_test_command(monkeypatch, capsys, tmp_path):
    oracle = StubOracle({"password": 42})
    _use_stub(monkeypatch, oracle)
    rc = cli.main(["--config", str(tmp_path / "missing.json"), "test", "password"])
    assert rc == 0
    assert oracle.calls == ["password"]
    assert "42" in capsys.readouterr().out

def test_test_command_oracle_down(monkeypatch, tmp_path):
    _use_stub(monkeypatch, StubOracle(fail=True))
    assert cli.main(["--config", str(tmp_path / "missing.json"), "test", "password"]) == 1

def test_init_config(tmp_path):
    p = tmp_path / "conf" / "config.json"
    assert cli.main(["--config", str(p), "init-config"]) == 0
    data = json.loads(p.read_text(encoding="utf-8"))
    assert data["max_attempts"] == 8
