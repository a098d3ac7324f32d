import pytest


@pytest.fixture(autouse=True)
def passquality_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("PASSQUALITY_HOME", str(home))
    return home
