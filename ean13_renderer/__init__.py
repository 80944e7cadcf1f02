"""
Пакет EAN-13 Barcode Renderer
=============================

Кодирование и растровый рендеринг штрихкодов EAN-13 и UPC-A.

Этот пакет предоставляет:
    - Кодировщик EAN-13 со строгой проверкой контрольной цифры
    - Нормализацию UPC-A (12 цифр) в EAN-13 с ведущим нулём
    - Растровый рендеринг через Pillow с масштабом, высотой и цветами
    - Явный кэш раскладки для предварительной подготовки (prepare)
    - Типизированные ошибки и результат "изображение или ошибка"

Пример базового использования:
    >>> from ean13_renderer import EAN13Barcode, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> bc = EAN13Barcode(barcode="4006381333931")
    >>> bc.configure(scale=2.0, height=60, background_color="white")
    >>> result = bc.render_result()
    >>> if result.ok:
    ...     logger.info(f"Штрихкод {result.image.size} готов")

Управление конфигурацией:
    >>> import os
    >>> os.environ['EAN13_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from ean13_renderer import load_config, EAN13Barcode
    >>>
    >>> config = load_config()
    >>> bc = EAN13Barcode.from_config(config, barcode="036000291452")

Версия: 0.1.0
Лицензия: MIT
Python: 3.10+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "EAN-13 Barcode Renderer Development Team"
__description__ = "EAN-13 / UPC-A barcode encoder and raster renderer"
__license__ = "MIT"
__python_requires__ = ">=3.10"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"EAN-13 Barcode Renderer требует Python 3.10 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOGGER_NAMESPACE = "ean13_renderer"
LOG_LEVEL_ENV = "EAN13_LOG_LEVEL"


_LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком для всех уровней
    - Структурированным форматом с временной меткой, уровнем,
      модулем и сообщением

    Уровень логирования задаётся переменной окружения
    EAN13_LOG_LEVEL. Допустимые значения:
    DEBUG, INFO, WARNING, ERROR, CRITICAL

    Функция идемпотентна - повторные вызовы не имеют
    дополнительного эффекта.
    """
    log_level_str = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    log_level = _LOG_LEVELS.get(log_level_str, logging.INFO)

    # Уже настроен (избегаем дублирования обработчиков)
    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Файловый обработчик (ротирующий) - все уровни
    try:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "ean13_renderer.log",
            maxBytes=5 * 1024 * 1024,  # 5 МБ
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except OSError as e:
        root_logger.warning(
            f"Не удалось инициализировать файловое логирование: {e}. "
            f"Используется только консоль."
        )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер пакета для указанного модуля.

    Логгеры именуются как 'ean13_renderer.<module_name>' и наследуют
    обработчики логгера пакета. Модули самого пакета вызывают
    logging.getLogger(__name__) и попадают в то же пространство имён.

    Аргументы:
        module_name: Имя модуля, обычно `__name__`.

    Возвращает:
        Экземпляр logging.Logger.

    Пример:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Штрихкод %s закодирован", digits)
    """
    if not module_name.startswith(LOGGER_NAMESPACE):
        if module_name == "__main__":
            full_name = f"{LOGGER_NAMESPACE}.main"
        else:
            clean_name = module_name.lstrip(".")
            full_name = f"{LOGGER_NAMESPACE}.{clean_name}"
    else:
        full_name = module_name

    return logging.getLogger(full_name)


def set_log_level(level: str) -> bool:
    """
    Установить уровень логирования пакета во время работы.

    Меняет уровень логгера пакета и файлового обработчика;
    консольный обработчик остаётся на WARNING.

    Аргументы:
        level: Имя уровня (DEBUG, INFO, WARNING, ERROR, CRITICAL),
               регистр не важен.

    Возвращает:
        True, если уровень применён; False для неизвестного имени.
    """
    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    log_level = _LOG_LEVELS.get(str(level).upper())
    if log_level is None:
        root_logger.warning(f"Неизвестный уровень логирования: {level!r}")
        return False

    root_logger.setLevel(log_level)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(log_level)
    return True


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

DEFAULT_CONFIG_FILENAME = "ean13_renderer.json"

# Значения конфигурации по умолчанию
_DEFAULT_CONFIG: Dict[str, Any] = {
    "scale": 1.0,
    "height": 50.0,
    "bar_color": "black",
    "background_color": [0, 0, 0, 0],
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию рендеринга из JSON-файла или
    использовать настройки по умолчанию.

    Если файл не существует или содержит недопустимый JSON,
    возвращается конфигурация по умолчанию с записью
    предупреждения в лог. Значения не проверяются здесь:
    некорректный масштаб или цвет отклоняется при рендеринге.

    Ключи конфигурации:
        - scale: float - Пикселей на модуль
        - height: float - Высота изображения в пикселях
        - bar_color: str | list - Цвет штрихов
        - background_color: str | list - Цвет фона
        - log_level: str - Уровень логирования; если задан в файле,
          применяется через set_log_level и заменяет EAN13_LOG_LEVEL

    Аргументы:
        config_path: Опциональный путь к файлу конфигурации.
                    Если None, ищет 'ean13_renderer.json' в текущем каталоге.

    Возвращает:
        Словарь со всеми ключами по умолчанию, переопределёнными
        пользовательскими значениями.

    Пример:
        >>> config = load_config()
        >>> config['scale']
        1.0
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILENAME)

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )

            config.update(user_config)
            if "log_level" in user_config:
                set_log_level(user_config["log_level"])

            logger.info(f"Конфигурация загружена из {config_path}")
            logger.debug(f"Конфигурация: {config}")

        except json.JSONDecodeError as e:
            logger.warning(
                f"Не удалось разобрать {config_path}: Недопустимый JSON "
                f"в строке {e.lineno}, столбце {e.colno}. "
                f"Используется конфигурация по умолчанию."
            )
        except OSError as e:
            logger.warning(
                f"Не удалось прочитать {config_path}: {e}. "
                f"Используется конфигурация по умолчанию."
            )
        except ValueError as e:
            logger.warning(
                f"Недопустимый формат конфигурации: {e}. "
                f"Используется конфигурация по умолчанию."
            )
    else:
        logger.info(
            f"Файл конфигурации {config_path} не найден. "
            f"Используется конфигурация по умолчанию."
        )

    return config


def check_dependencies(include_test: bool = False) -> Dict[str, bool]:
    """
    Проверить, установлены ли зависимости.

    Проверяемые зависимости:
        Обязательные:
        - pillow: Растровые изображения и цвета

        Тестовые (extra "test", только при include_test=True):
        - python-barcode: Эталонный кодировщик для тестов

    Аргументы:
        include_test: Добавить в отчёт зависимости тестового окружения.

    Возвращает:
        Словарь, отображающий имена пакетов на статус доступности.
    """
    dependencies: Dict[str, bool] = {}

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    if include_test:
        try:
            import barcode  # noqa: F401

            dependencies["python-barcode"] = True
        except ImportError:
            dependencies["python-barcode"] = False

    return dependencies


_setup_logging()

# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

# Примечание: импорты размещены после функций утилит, чтобы
# логирование было настроено первым.

from .barcodegen import (  # noqa: E402
    BarcodeGenError,
    BarcodeLayout,
    ChecksumMismatchError,
    EncodeError,
    InvalidCharactersError,
    InvalidLengthError,
    InvalidParameterError,
    LayoutCache,
    LayoutKey,
    Module,
    ModuleSequence,
    RenderError,
    append_check_digit,
    compute_check_digit,
    compute_layout,
    encode,
    encode_bits,
    is_valid,
    paint,
    render,
    render_bytes,
)
from .model import ErrorKind, ModuleKind, Parity  # noqa: E402
from .model.ean13_barcode import (  # noqa: E402
    EAN13Barcode,
    RenderOptions,
    RenderResult,
)

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "set_log_level",
    "load_config",
    "check_dependencies",
    # Кодировщик
    "Module",
    "ModuleSequence",
    "encode",
    "encode_bits",
    "is_valid",
    "compute_check_digit",
    "append_check_digit",
    # Рендерер
    "BarcodeLayout",
    "compute_layout",
    "paint",
    "render",
    "render_bytes",
    "LayoutCache",
    "LayoutKey",
    # Доменная модель
    "EAN13Barcode",
    "RenderOptions",
    "RenderResult",
    "ErrorKind",
    "ModuleKind",
    "Parity",
    # Ошибки
    "BarcodeGenError",
    "EncodeError",
    "InvalidCharactersError",
    "InvalidLengthError",
    "ChecksumMismatchError",
    "RenderError",
    "InvalidParameterError",
]
