"""
Модуль бизнес-логики переименования.

Для каждого файла каталога к имени добавляется префикс с датой последнего
изменения в формате YYYYMMDD: report.txt -> 20041218_report.txt.

Порядок работы:
    1. чтение каталога (без рекурсии, подкаталоги пропускаются);
    2. построение плана переименований и проверка коллизий имён;
    3. последовательное переименование с остановкой на первой ошибке.

Уже применённый префикс не распознаётся: повторный запуск добавит
второй префикс (20041218_20041218_report.txt).
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple, Union

try:
    from .config_loader import RenamerConfig
    from .logger import RenamerLogger
    from .file_ops import (
        FileOps, FileEntry, RenamerError, DirectoryAccessError,
        RenameError, NameCollisionError,
    )
except ImportError:
    from config_loader import RenamerConfig
    from logger import RenamerLogger
    from file_ops import (
        FileOps, FileEntry, RenamerError, DirectoryAccessError,
        RenameError, NameCollisionError,
    )


__all__ = [
    'FiledateRenamer', 'RenameOp', 'RenameStats', 'DateLike', 'format_date',
    'RenamerError', 'DirectoryAccessError', 'RenameError',
    'NameCollisionError', 'FormatRangeError', 'create_renamer',
]


MIN_YEAR = 1000
MAX_YEAR = 9999
SEPARATOR = '_'


class FormatRangeError(RenamerError):
    """Исключение для даты вне диапазона формата YYYYMMDD."""
    pass


class DateLike(Protocol):
    """Любое значение с компонентами year, month и day."""
    year: int
    month: int
    day: int


def format_date(date: DateLike) -> str:
    """
    Форматирует дату в виде YYYYMMDD.

    Args:
        date: Дата (datetime, date или объект с year/month/day)

    Returns:
        str: Строка из 8 цифр

    Raises:
        FormatRangeError: Если год вне диапазона 1000-9999 или
            месяц/день некорректны
    """
    year, month, day = date.year, date.month, date.day

    if not MIN_YEAR <= year <= MAX_YEAR:
        raise FormatRangeError(f"Год {year} вне диапазона {MIN_YEAR}-{MAX_YEAR}")
    if not 1 <= month <= 12:
        raise FormatRangeError(f"Некорректный месяц: {month}")
    if not 1 <= day <= 31:
        raise FormatRangeError(f"Некорректный день: {day}")

    return f"{year:04d}{month:02d}{day:02d}"


@dataclass
class RenameOp:
    """Одна запланированная операция переименования."""
    source: Path
    target: Path

    @property
    def new_name(self) -> str:
        return self.target.name


class RenameStats:
    """Класс для хранения статистики одного запуска."""

    def __init__(self):
        self.renamed_files = 0
        self.skipped_entries = 0
        self.start_time = None
        self.end_time = None
        self.renamed: List[Tuple[Path, Path]] = []

    def add_renamed(self, source: Path, target: Path):
        self.renamed.append((source, target))
        self.renamed_files += 1

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None


class FiledateRenamer:
    """Добавляет дату изменения файла в начало его имени."""

    def __init__(self, config: RenamerConfig, logger: RenamerLogger,
                 file_ops: Optional[FileOps] = None, echo=print):
        """
        Инициализация.

        Args:
            config: Конфигурация переименования
            logger: Логгер для записи операций
            file_ops: Операции с файловой системой
            echo: Функция вывода строк " rename ..." (по умолчанию print)
        """
        self.config = config
        self.logger = logger
        self.file_ops = file_ops or FileOps(logger)
        self.echo = echo

    def format(self, date: DateLike) -> str:
        """Форматирует дату в виде YYYYMMDD."""
        return format_date(date)

    def new_name_for(self, entry: FileEntry) -> str:
        return self.format(entry.modification_time) + SEPARATOR + entry.name

    def _skip_reason(self, entry: FileEntry) -> Optional[str]:
        if not entry.is_file:
            return "не является обычным файлом"
        if entry.name.startswith('.') and not self.config.include_hidden:
            return "скрытый файл"
        suffix = entry.path.suffix.lower()
        if suffix and suffix in self.config.ignore_extensions:
            return f"расширение {suffix} в списке исключений"
        return None

    def plan(self, start_dir: Union[str, Path], stats: Optional[RenameStats] = None) -> List[RenameOp]:
        """
        Строит план переименований для каталога.

        Args:
            start_dir: Обрабатываемый каталог
            stats: Статистика для учёта пропущенных элементов

        Returns:
            List[RenameOp]: Операции в порядке выполнения

        Raises:
            DirectoryAccessError: Если каталог недоступен
            NameCollisionError: Если целевые имена совпадают или уже заняты
            FormatRangeError: Если дата файла вне диапазона формата
        """
        directory = Path(start_dir)
        entries = self.file_ops.list_entries(directory)
        existing = {entry.name for entry in entries}

        operations = []
        targets: Dict[str, Path] = {}
        for entry in entries:
            reason = self._skip_reason(entry)
            if reason:
                self.logger.log_file_skipped(entry.path, reason)
                if stats is not None:
                    stats.skipped_entries += 1
                continue

            try:
                new_name = self.new_name_for(entry)
            except FormatRangeError as e:
                self.logger.log_file_error(entry.name, e)
                raise FormatRangeError(f"{entry.path}: {e}") from e

            if new_name in targets:
                raise NameCollisionError(
                    f"Файлы {targets[new_name].name} и {entry.name} получают одинаковое имя {new_name}",
                    entry.path
                )
            if new_name in existing:
                raise NameCollisionError(
                    f"Новое имя {new_name} для {entry.name} уже занято в каталоге {directory}",
                    entry.path
                )

            targets[new_name] = entry.path
            operations.append(RenameOp(entry.path, directory / new_name))

        return operations

    def apply_to_all(self, start_dir: Union[str, Path]) -> RenameStats:
        """
        Переименовывает все файлы каталога.

        Выполнение прерывается на первой ошибке; уже переименованные
        файлы остаются переименованными и перечислены в логе.

        Args:
            start_dir: Обрабатываемый каталог

        Returns:
            RenameStats: Статистика запуска

        Raises:
            DirectoryAccessError: Если каталог недоступен
            NameCollisionError: Если целевое имя занято
            RenameError: Если файл не удалось переименовать
            FormatRangeError: Если дата файла вне диапазона формата
        """
        stats = RenameStats()
        stats.start_time = datetime.now()
        self.logger.log_run_start(Path(start_dir))

        operations = self.plan(start_dir, stats)

        for op in operations:
            self.echo(f" rename {op.source} => {op.new_name}")
            try:
                self.file_ops.rename_file(op.source, op.target)
            except RenameError:
                if stats.renamed:
                    done = ", ".join(source.name for source, _ in stats.renamed)
                    self.logger.log_warning(f"До ошибки переименованы: {done}")
                raise
            stats.add_renamed(op.source, op.target)

        stats.end_time = datetime.now()
        self.logger.log_run_end(stats.renamed_files, stats.skipped_entries, stats.get_duration())
        return stats


def create_renamer(config: RenamerConfig, logger: RenamerLogger) -> FiledateRenamer:
    """Удобная функция для создания объекта FiledateRenamer."""
    return FiledateRenamer(config, logger)
