"""
Модуль для загрузки и валидации конфигурации приложения.

Конфигурация необязательна: без файла используются значения по умолчанию
(default_config). Файл в формате INI загружается только по явному запросу,
например через опцию --config командной строки.
"""

import configparser
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field


@dataclass
class RenamerConfig:
    """Конфигурация переименования."""
    include_hidden: bool = False
    ignore_extensions: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Конфигурация логирования."""
    level: str = 'INFO'
    log_file: Optional[Path] = None
    max_log_size: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Основная конфигурация приложения."""
    renamer: RenamerConfig
    logging: LoggingConfig


def default_config() -> Config:
    """Возвращает конфигурацию по умолчанию."""
    return Config(renamer=RenamerConfig(), logging=LoggingConfig())


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    def __init__(self, config_path: str = "config/settings.ini"):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если файл конфигурации не найден
            ValueError: Если конфигурация некорректна
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")

        config_parser = configparser.ConfigParser()

        try:
            config_parser.read(self.config_path, encoding='utf-8')

            self._config = Config(
                renamer=self._load_renamer_config(config_parser),
                logging=self._load_logging_config(config_parser)
            )
        except (configparser.Error, ValueError) as e:
            raise ValueError(f"Ошибка загрузки конфигурации: {e}") from e

        self._validate_config()
        return self._config

    def _load_renamer_config(self, parser: configparser.ConfigParser) -> RenamerConfig:
        """Загружает конфигурацию переименования."""
        section = 'renamer'

        if not parser.has_section(section):
            return RenamerConfig()

        raw_extensions = parser.get(section, 'ignore_extensions', fallback='')
        extensions = [
            self._normalize_extension(ext)
            for ext in raw_extensions.split(',')
            if ext.strip()
        ]

        return RenamerConfig(
            include_hidden=parser.getboolean(section, 'include_hidden', fallback=False),
            ignore_extensions=extensions
        )

    @staticmethod
    def _normalize_extension(ext: str) -> str:
        ext = ext.strip().lower()
        return ext if ext.startswith('.') else '.' + ext

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'

        if not parser.has_section(section):
            return LoggingConfig()

        # Пустое значение означает вывод только в консоль
        log_file = parser.get(section, 'log_file', fallback='').strip()

        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            log_file=Path(log_file) if log_file else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5)
        )

    def _validate_config(self) -> None:
        """Валидирует загруженную конфигурацию."""
        if not self._config:
            raise ValueError("Конфигурация не загружена")

        validate_config(self._config)


def validate_config(config: Config) -> None:
    """
    Проверяет значения конфигурации.

    Raises:
        ValueError: Если одно из значений некорректно
    """
    if config.logging.level.upper() not in ConfigLoader.VALID_LEVELS:
        raise ValueError(f"Некорректный уровень логирования: {config.logging.level}")

    if config.logging.max_log_size <= 0:
        raise ValueError("Размер файла лога должен быть больше 0")

    if config.logging.backup_count < 0:
        raise ValueError("Количество резервных копий лога не может быть отрицательным")


def load_config(config_path: str = "config/settings.ini") -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()
