import os
from unittest.mock import patch

from hcm_skills import main


def test_run_serves_app_on_configured_port():
    """O servidor deve subir na porta de APP_PORT."""
    with patch("hcm_skills.main.uvicorn.run") as mock_run:
        main.run()

    mock_run.assert_called_once_with(main.app, host="0.0.0.0", port=main.SETTINGS.app_port)


def test_app_port_from_environment():
    with patch.dict(os.environ, {"APP_PORT": "8080"}):
        assert main.Settings().app_port == 8080
