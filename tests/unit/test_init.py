"""
Модульные тесты для ean13_renderer/__init__.py
Тестирует метаданные, логирование, конфигурацию и публичный API.
"""

import json
import logging
import re
from pathlib import Path
from unittest import mock

import pytest

import ean13_renderer


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        """Проверить, что __version__ следует семантическому версионированию."""
        assert re.match(r"^\d+\.\d+\.\d+$", ean13_renderer.__version__)

    def test_version_components(self) -> None:
        expected_version = (
            f"{ean13_renderer.VERSION_MAJOR}."
            f"{ean13_renderer.VERSION_MINOR}."
            f"{ean13_renderer.VERSION_PATCH}"
        )
        assert ean13_renderer.__version__ == expected_version

    def test_metadata_attributes(self) -> None:
        for attr in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(ean13_renderer, attr)
            assert isinstance(value, str) and value, f"{attr} должен быть непустой строкой"


class TestPublicAPI:
    """Тестирование экспортов публичного API."""

    def test_all_exports_exist(self) -> None:
        for name in ean13_renderer.__all__:
            assert hasattr(ean13_renderer, name), f"Имя '{name}' из __all__ не существует"

    def test_no_duplicate_exports(self) -> None:
        assert len(ean13_renderer.__all__) == len(set(ean13_renderer.__all__))

    def test_core_exported(self) -> None:
        for name in ("encode", "render", "EAN13Barcode", "BarcodeGenError"):
            assert name in ean13_renderer.__all__

    def test_end_to_end(self) -> None:
        img = ean13_renderer.render(
            ean13_renderer.encode("4006381333931"), scale=2, height=25
        )
        assert img.size == (190, 25)


class TestLogging:
    """Тестирование конфигурации логирования."""

    def test_get_logger_returns_logger(self) -> None:
        assert isinstance(ean13_renderer.get_logger("test_module"), logging.Logger)

    def test_get_logger_name_format(self) -> None:
        logger = ean13_renderer.get_logger("test_module")
        assert logger.name == "ean13_renderer.test_module"

    def test_get_logger_with_qualified_name(self) -> None:
        logger = ean13_renderer.get_logger("ean13_renderer.barcodegen.ean13_encoder")
        assert logger.name == "ean13_renderer.barcodegen.ean13_encoder"

    def test_get_logger_with_main(self) -> None:
        assert ean13_renderer.get_logger("__main__").name == "ean13_renderer.main"

    def test_package_logger_is_configured(self) -> None:
        root_logger = logging.getLogger("ean13_renderer")
        assert len(root_logger.handlers) >= 1
        assert root_logger.propagate is False

    def test_log_level_from_environment(self) -> None:
        root_logger = logging.getLogger("ean13_renderer")
        saved_handlers = root_logger.handlers[:]
        saved_level = root_logger.level
        for handler in saved_handlers:
            root_logger.removeHandler(handler)
        try:
            with mock.patch.dict("os.environ", {"EAN13_LOG_LEVEL": "DEBUG"}):
                ean13_renderer._setup_logging()
            assert root_logger.level == logging.DEBUG
        finally:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root_logger.addHandler(handler)
            root_logger.setLevel(saved_level)

    def test_setup_logging_is_idempotent(self) -> None:
        root_logger = logging.getLogger("ean13_renderer")
        count = len(root_logger.handlers)
        ean13_renderer._setup_logging()
        assert len(root_logger.handlers) == count


@pytest.fixture
def restore_log_level():
    root_logger = logging.getLogger("ean13_renderer")
    saved = root_logger.level
    saved_handler_levels = [(h, h.level) for h in root_logger.handlers]
    yield root_logger
    root_logger.setLevel(saved)
    for handler, level in saved_handler_levels:
        handler.setLevel(level)


class TestSetLogLevel:
    def test_applies_level(self, restore_log_level: logging.Logger) -> None:
        assert ean13_renderer.set_log_level("error") is True
        assert restore_log_level.level == logging.ERROR

    def test_console_handler_stays_at_warning(
        self, restore_log_level: logging.Logger
    ) -> None:
        ean13_renderer.set_log_level("DEBUG")
        for handler in restore_log_level.handlers:
            if type(handler) is logging.StreamHandler:
                assert handler.level == logging.WARNING

    def test_unknown_level_rejected(self, restore_log_level: logging.Logger) -> None:
        before = restore_log_level.level
        assert ean13_renderer.set_log_level("LOUD") is False
        assert restore_log_level.level == before


class TestConfiguration:
    """Тестирование управления конфигурацией."""

    def test_load_config_defaults(self, tmp_path: Path) -> None:
        config = ean13_renderer.load_config(tmp_path / "missing.json")
        assert config["scale"] == 1.0
        assert config["height"] == 50.0
        assert config["bar_color"] == "black"
        assert config["background_color"] == [0, 0, 0, 0]
        assert config["log_level"] == "INFO"

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "custom.json"
        config_path.write_text(
            json.dumps({"scale": 3.0, "bar_color": "#112233"}), encoding="utf-8"
        )
        config = ean13_renderer.load_config(config_path)
        assert config["scale"] == 3.0
        assert config["bar_color"] == "#112233"
        assert config["height"] == 50.0

    def test_load_config_invalid_json(self, tmp_path: Path) -> None:
        config_path = tmp_path / "broken.json"
        config_path.write_text("{ not json", encoding="utf-8")
        config = ean13_renderer.load_config(config_path)
        assert config["scale"] == 1.0

    def test_load_config_non_object(self, tmp_path: Path) -> None:
        config_path = tmp_path / "list.json"
        config_path.write_text("[1, 2, 3]", encoding="utf-8")
        config = ean13_renderer.load_config(config_path)
        assert config["height"] == 50.0

    def test_load_config_applies_log_level(
        self, tmp_path: Path, restore_log_level: logging.Logger
    ) -> None:
        config_path = tmp_path / "debug.json"
        config_path.write_text(json.dumps({"log_level": "DEBUG"}), encoding="utf-8")
        config = ean13_renderer.load_config(config_path)
        assert config["log_level"] == "DEBUG"
        assert restore_log_level.level == logging.DEBUG

    def test_default_log_level_not_applied(
        self, tmp_path: Path, restore_log_level: logging.Logger
    ) -> None:
        restore_log_level.setLevel(logging.ERROR)
        ean13_renderer.load_config(tmp_path / "missing.json")
        assert restore_log_level.level == logging.ERROR

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        config = ean13_renderer.load_config(tmp_path / "missing.json")
        config["scale"] = 99
        assert ean13_renderer.load_config(tmp_path / "missing.json")["scale"] == 1.0

    def test_config_drives_barcode(self, tmp_path: Path) -> None:
        config_path = tmp_path / "render.json"
        config_path.write_text(json.dumps({"scale": 2, "height": 12}), encoding="utf-8")
        bc = ean13_renderer.EAN13Barcode.from_config(
            ean13_renderer.load_config(config_path), barcode="036000291452"
        )
        img = bc.barcode_image
        assert img is not None
        assert img.size == (190, 12)
        # JSON list background color is accepted as RGBA
        assert img.getpixel((2, 0)) == (0, 0, 0, 0)


class TestDependencies:
    def test_runtime_dependencies(self) -> None:
        deps = ean13_renderer.check_dependencies()
        assert deps == {"pillow": True}

    def test_test_dependencies_on_request(self) -> None:
        deps = ean13_renderer.check_dependencies(include_test=True)
        assert set(deps) == {"pillow", "python-barcode"}
        assert all(isinstance(v, bool) for v in deps.values())
