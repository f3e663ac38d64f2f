from __future__ import annotations

import pytest

import app


@pytest.mark.parametrize("rate", ["0", "-5"])
def test_run_rejects_non_positive_tick_rate(rate: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app.main(["run", "--player", "Steve", "--tick-rate", rate])

    assert excinfo.value.code == 2
    assert "--tick-rate must be at least 1" in capsys.readouterr().err


def test_environment_file_is_loaded_by_settings_only() -> None:
    import settings

    assert hasattr(settings, "load_dotenv")
    assert not hasattr(app, "load_dotenv")
