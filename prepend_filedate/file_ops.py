"""
Модуль для операций с файловой системой.

Чтение содержимого каталога (без рекурсии), получение даты изменения
файлов и переименование внутри каталога с проверкой занятости имени.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Union

try:
    from .logger import RenamerLogger
except ImportError:
    from logger import RenamerLogger


class RenamerError(Exception):
    """Базовое исключение приложения."""
    pass


class DirectoryAccessError(RenamerError):
    """Исключение для отсутствующего или недоступного каталога."""
    pass


class RenameError(RenamerError):
    """Исключение для ошибки переименования отдельного файла."""

    def __init__(self, message: str, path: Path = None):
        super().__init__(message)
        self.path = path


class NameCollisionError(RenameError):
    """Исключение для случая, когда целевое имя уже занято."""
    pass


@dataclass
class FileEntry:
    """Элемент каталога."""
    path: Path
    modification_time: datetime
    is_file: bool = True

    @property
    def name(self) -> str:
        """Имя без пути к каталогу."""
        return self.path.name


class FileOps:
    """Класс для операций с файловой системой."""

    def __init__(self, logger: RenamerLogger):
        """
        Инициализация операций с файлами.

        Args:
            logger: Логгер для записи операций
        """
        self.logger = logger

    def check_directory(self, directory: Union[str, Path]) -> Path:
        """
        Проверяет, что каталог существует и доступен для чтения.

        Returns:
            Path: Путь к каталогу

        Raises:
            DirectoryAccessError: Если каталог не существует или недоступен
        """
        path = Path(directory)

        if not path.exists():
            raise DirectoryAccessError(f"Каталог не найден: {path}")
        if not path.is_dir():
            raise DirectoryAccessError(f"Путь не является каталогом: {path}")
        if not os.access(path, os.R_OK | os.X_OK):
            raise DirectoryAccessError(f"Нет доступа к каталогу: {path}")

        return path

    def list_entries(self, directory: Union[str, Path]) -> List[FileEntry]:
        """
        Получает элементы каталога, отсортированные по имени.

        Args:
            directory: Каталог для чтения

        Returns:
            List[FileEntry]: Элементы каталога (без рекурсии)

        Raises:
            DirectoryAccessError: Если каталог не удалось прочитать
        """
        path = self.check_directory(directory)

        try:
            children = sorted(path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            self.logger.log_file_error(str(path), e)
            raise DirectoryAccessError(f"Ошибка чтения каталога {path}: {e}") from e

        entries = []
        for child in children:
            try:
                stat = child.stat()
            except OSError as e:
                # Элемент мог исчезнуть после чтения каталога
                self.logger.log_warning(f"Не удалось получить сведения о {child}: {e}")
                continue
            entries.append(FileEntry(
                path=child,
                modification_time=datetime.fromtimestamp(stat.st_mtime),
                is_file=child.is_file()
            ))

        self.logger.log_system_info(f"Элементов в каталоге {path}: {len(entries)}")
        return entries

    def rename_file(self, source_path: Path, target_path: Path) -> Path:
        """
        Переименовывает файл, не перезаписывая существующий.

        Args:
            source_path: Исходный путь
            target_path: Новый путь

        Returns:
            Path: Новый путь к файлу

        Raises:
            NameCollisionError: Если целевое имя уже занято
            RenameError: Если произошла ошибка при переименовании
        """
        if not source_path.exists():
            error = RenameError(f"Исходный файл не найден: {source_path}", source_path)
            self.logger.log_file_error(source_path.name, error)
            raise error

        if target_path.exists():
            error = NameCollisionError(f"Целевое имя уже занято: {target_path}", source_path)
            self.logger.log_file_error(source_path.name, error)
            raise error

        try:
            source_path.rename(target_path)
        except OSError as e:
            self.logger.log_file_error(source_path.name, e)
            raise RenameError(f"Ошибка переименования файла {source_path}: {e}", source_path) from e

        self.logger.log_file_renamed(source_path, target_path)
        return target_path
