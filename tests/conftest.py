"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides the sample application every introspection test runs against.
"""

import importlib
import os
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local appinspector package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of appinspector modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("appinspector"):
        del sys.modules[module_name]

from appinspector.config.constants import ENV_APP_PATH  # noqa: E402
from appinspector.config.models import TargetConfig  # noqa: E402
from appinspector.runtime.bootstrap import Runtime, bootstrap  # noqa: E402

SAMPLE_APP = Path(__file__).parent / "fixtures" / "sample_app"

# Tables present in the test database; the rest exist only as mappings
CREATED_TABLES = (
    "users",
    "posts",
    "comments",
    "profiles",
    "roles",
    "user_roles",
    "ira_accounts",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host configuration out of every test."""
    monkeypatch.setattr(
        "appinspector.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global-config.yaml"
    )
    monkeypatch.delenv(ENV_APP_PATH, raising=False)
    for key in list(os.environ):
        if key.startswith("APPINSPECTOR__"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_app() -> Path:
    """Root of the sample application."""
    return SAMPLE_APP


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """SQLite database holding the sample app's created tables."""
    return f"sqlite:///{tmp_path / 'app.db'}"


@pytest.fixture
def runtime(sample_app: Path, database_url: str) -> Generator[Runtime, None, None]:
    """Bootstrapped sample app backed by a fresh database."""
    rt = bootstrap(sample_app, TargetConfig(database_url=database_url))
    base = importlib.import_module("app.db").Base
    assert rt.engine is not None
    base.metadata.create_all(
        rt.engine, tables=[base.metadata.tables[name] for name in CREATED_TABLES]
    )
    yield rt
    rt.engine.dispose()


@pytest.fixture
def offline_runtime(sample_app: Path) -> Runtime:
    """Bootstrapped sample app with no database engine."""
    return bootstrap(sample_app, TargetConfig())
