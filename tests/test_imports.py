import os
import subprocess
import sys

import pytest


@pytest.mark.parametrize(
    "module",
    [
        "controlpanel.main",
        "controlpanel.templates_config",
        "controlpanel.web.settings",
        "controlpanel.web.auth",
    ],
)
def test_module_imports_in_fresh_interpreter(module):
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
        env=os.environ.copy(),
        timeout=60,
    )

    assert result.returncode == 0, result.stderr


def test_app_serves_every_router():
    from controlpanel.main import app

    paths = {route.path for route in app.routes}

    assert "/login" in paths
    assert "/settings" in paths
    assert "/settings/email/test" in paths
