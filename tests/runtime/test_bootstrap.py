"""Tests for runtime/bootstrap.py.

Throwaway applications get unique bootstrap module names so they never
collide with the sample app's ``app`` package in sys.modules.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import Engine

from appinspector.config.constants import ENV_APP_PATH
from appinspector.config.models import TargetConfig
from appinspector.core.errors import BootstrapError, ErrorCode
from appinspector.runtime.bootstrap import (
    Runtime,
    bootstrap,
    has_bootstrap_entry,
    locate_app_root,
    package_dir,
)


def _make_app(root: Path, module: str, source: str = "") -> Path:
    package = root / module
    (package / "models").mkdir(parents=True)
    (package / "__init__.py").write_text(source)
    (package / "models" / "__init__.py").write_text("")
    return root


class TestPackageDir:
    """Tests for package_dir and has_bootstrap_entry."""

    def test_dotted_package_maps_to_directory(self, tmp_path: Path) -> None:
        """Each dotted segment is a directory level."""
        expected = tmp_path / "shop" / "domain" / "models"

        assert package_dir(tmp_path, "shop.domain.models") == expected

    def test_package_entry(self, sample_app: Path) -> None:
        """A package with __init__.py is a bootstrap entry."""
        assert has_bootstrap_entry(sample_app, TargetConfig())

    def test_single_module_entry(self, tmp_path: Path) -> None:
        """A lone module file is also a bootstrap entry."""
        (tmp_path / "wsgi.py").write_text("")

        assert has_bootstrap_entry(tmp_path, TargetConfig(bootstrap_module="wsgi"))

    def test_missing_entry(self, tmp_path: Path) -> None:
        """An empty directory has no bootstrap entry."""
        assert not has_bootstrap_entry(tmp_path, TargetConfig())


class TestLocateAppRoot:
    """Tests for locate_app_root."""

    def test_env_value_wins(
        self, tmp_path: Path, sample_app: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The environment value is used even when cwd looks like an app."""
        monkeypatch.setenv(ENV_APP_PATH, str(tmp_path))

        assert locate_app_root(TargetConfig(), cwd=sample_app) == tmp_path.resolve()

    def test_cwd_with_app_layout(self, sample_app: Path) -> None:
        """A working directory holding the bootstrap module and models is the root."""
        assert locate_app_root(TargetConfig(), cwd=sample_app) == sample_app.resolve()

    def test_fallback_is_two_levels_up(self, tmp_path: Path) -> None:
        """Without an env value or app layout, the root is two levels up."""
        cwd = tmp_path / "vendor" / "appinspector"
        cwd.mkdir(parents=True)

        assert locate_app_root(TargetConfig(), cwd=cwd) == tmp_path.resolve()

    def test_cwd_without_models_falls_back(self, tmp_path: Path) -> None:
        """A bootstrap module alone does not make the cwd an app root."""
        cwd = tmp_path / "a" / "b"
        (cwd / "app").mkdir(parents=True)
        (cwd / "app" / "__init__.py").write_text("")

        assert locate_app_root(TargetConfig(), cwd=cwd) == tmp_path.resolve()


class TestBootstrap:
    """Tests for bootstrap."""

    def test_given_missing_app_when_bootstrap_then_app_not_found(self, tmp_path: Path) -> None:
        """No bootstrap module means the application is not there."""
        with pytest.raises(BootstrapError) as exc_info:
            bootstrap(tmp_path, TargetConfig())

        assert exc_info.value.code == ErrorCode.APP_NOT_FOUND
        assert exc_info.value.message == f"Application not found at: {tmp_path}"

    def test_given_failing_bootstrap_when_bootstrap_then_failed(self, tmp_path: Path) -> None:
        """Exceptions raised while booting become BootstrapError."""
        _make_app(tmp_path, "exploding_app", "raise RuntimeError('boom')\n")

        with pytest.raises(BootstrapError) as exc_info:
            bootstrap(tmp_path, TargetConfig(bootstrap_module="exploding_app"))

        assert exc_info.value.code == ErrorCode.BOOTSTRAP_FAILED
        assert "boom" in exc_info.value.message

    def test_given_sample_app_when_bootstrap_then_runtime(self, offline_runtime: Runtime) -> None:
        """A successful bootstrap exposes the catalog directories."""
        assert offline_runtime.models_dir == offline_runtime.app_root / "app" / "models"
        assert offline_runtime.enums_dir == offline_runtime.app_root / "app" / "enums"
        assert offline_runtime.base_class is None

    def test_no_engine_configured(self, offline_runtime: Runtime) -> None:
        """Without a URL, reference or engine attribute there is no engine."""
        assert offline_runtime.engine is None

    def test_database_url_creates_engine(self, sample_app: Path, database_url: str) -> None:
        """database_url takes precedence and builds an engine."""
        rt = bootstrap(sample_app, TargetConfig(database_url=database_url))

        assert isinstance(rt.engine, Engine)
        assert str(rt.engine.url) == database_url
        rt.engine.dispose()

    def test_engine_factory_reference_is_called(self, sample_app: Path) -> None:
        """A callable engine reference is invoked to build the engine."""
        rt = bootstrap(sample_app, TargetConfig(engine="app.db:make_engine"))

        assert isinstance(rt.engine, Engine)
        assert str(rt.engine.url) == "sqlite://"

    def test_engine_attribute_on_bootstrap_module(self, tmp_path: Path) -> None:
        """An 'engine' attribute on the bootstrap module is picked up."""
        _make_app(
            tmp_path,
            "engine_attr_app",
            "from sqlalchemy import create_engine\nengine = create_engine('sqlite://')\n",
        )

        rt = bootstrap(tmp_path, TargetConfig(bootstrap_module="engine_attr_app"))

        assert isinstance(rt.engine, Engine)

    def test_failing_engine_factory(self, tmp_path: Path) -> None:
        """A factory that raises fails the bootstrap."""
        _make_app(
            tmp_path,
            "bad_factory_app",
            "def engine():\n    raise ConnectionError('refused')\n",
        )

        with pytest.raises(BootstrapError, match="refused"):
            bootstrap(tmp_path, TargetConfig(bootstrap_module="bad_factory_app"))

    def test_unresolvable_engine_reference(self, sample_app: Path) -> None:
        """An engine reference that cannot be imported fails the bootstrap."""
        with pytest.raises(BootstrapError) as exc_info:
            bootstrap(sample_app, TargetConfig(engine="app.db:no_such_engine"))

        assert exc_info.value.details["target"] == "app.db:no_such_engine"

    def test_base_class_reference(self, sample_app: Path) -> None:
        """A configured base class is imported onto the runtime."""
        rt = bootstrap(sample_app, TargetConfig(base_class="app.db:Base"))

        assert rt.base_class is not None
        assert rt.base_class.__name__ == "Base"

    def test_unresolvable_base_class(self, sample_app: Path) -> None:
        """A base class reference that cannot be imported fails the bootstrap."""
        with pytest.raises(BootstrapError):
            bootstrap(sample_app, TargetConfig(base_class="app.db:Missing"))
