"""
Модуль для настройки и управления логированием приложения.

Консольный вывод направляется в stderr: stdout зарезервирован под строки
вида " rename <старый путь> => <новое имя>". Файл лога с ротацией
подключается только если он указан в конфигурации.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

try:
    from .config_loader import LoggingConfig
except ImportError:
    from config_loader import LoggingConfig


LOGGER_NAME = 'prepend_filedate'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            # Запись может обрабатываться и файловым обработчиком
            record.levelname = levelname


class RenamerLogger:
    """Класс для управления логированием приложения."""

    def __init__(self, config: LoggingConfig, stream=None):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
            stream: Поток для консольного вывода (по умолчанию sys.stderr)
        """
        self.config = config
        self.stream = stream
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с консольным и, при необходимости, файловым выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        # Очищаем существующие обработчики
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        console_handler = logging.StreamHandler(self.stream or sys.stderr)
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if self.config.log_file:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,  # MB -> байты
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def get_logger(self) -> logging.Logger:
        """
        Возвращает настроенный логгер.

        Returns:
            logging.Logger: Настроенный логгер
        """
        if self.logger is None:
            raise RuntimeError("Логгер не инициализирован")
        return self.logger

    def log_run_start(self, start_dir: Path) -> None:
        """
        Логирует начало обработки каталога.

        Args:
            start_dir: Обрабатываемый каталог
        """
        self.logger.info(f"🚀 Начало обработки каталога: {start_dir}")

    def log_run_end(self, renamed: int, skipped: int, duration: Optional[float]) -> None:
        """
        Логирует завершение обработки каталога.

        Args:
            renamed: Переименовано файлов
            skipped: Пропущено элементов
            duration: Продолжительность в секундах
        """
        self.logger.info(f"✅ Обработка завершена: переименовано {renamed}, пропущено {skipped}")
        if duration is not None:
            self.logger.debug(f"⏰ Продолжительность: {duration:.3f} сек")

    def log_file_renamed(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует успешное переименование файла.

        Args:
            source_path: Исходный путь
            target_path: Новый путь
        """
        self.logger.info(f"📁 Файл переименован: {source_path} → {target_path}")

    def log_file_skipped(self, path: Path, reason: str) -> None:
        """
        Логирует пропуск элемента каталога.

        Args:
            path: Путь к элементу
            reason: Причина пропуска
        """
        self.logger.debug(f"⏭️ Пропущен {path}: {reason}")

    def log_file_error(self, name: str, error: Exception) -> None:
        """
        Логирует ошибку при обработке файла.

        Args:
            name: Имя файла
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка при обработке файла {name}: {error}")

    def log_system_info(self, info: str) -> None:
        """Логирует системную информацию."""
        self.logger.info(f"ℹ️ {info}")

    def log_warning(self, message: str) -> None:
        """Логирует предупреждение."""
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")


def setup_logger(config: LoggingConfig) -> logging.Logger:
    """
    Удобная функция для быстрой настройки логгера.

    Args:
        config: Конфигурация логирования

    Returns:
        logging.Logger: Настроенный логгер
    """
    return RenamerLogger(config).get_logger()


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Получает логгер по имени."""
    return logging.getLogger(name)
