"""
Главный модуль CLI интерфейса.

Использование:
    prepend_filedate_to_filename [--config settings.ini] [--verbose] <start dir>
"""

import argparse
import sys
from typing import List, Optional

try:
    from .config_loader import Config, default_config, load_config
    from .logger import RenamerLogger
    from .renamer import FiledateRenamer, RenamerError, create_renamer
except ImportError:
    from config_loader import Config, default_config, load_config
    from logger import RenamerLogger
    from renamer import FiledateRenamer, RenamerError, create_renamer


USAGE = "Usage: PrependFiledateToFilename <start dir>"


class UsageError(Exception):
    """Исключение для неверного количества аргументов."""
    pass


class RenamerCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config: Optional[Config] = None
        self.logger: Optional[RenamerLogger] = None
        self.renamer: Optional[FiledateRenamer] = None

    def setup(self, config_path: Optional[str] = None, verbose: bool = False) -> bool:
        """
        Инициализирует CLI с конфигурацией.

        Args:
            config_path: Путь к файлу конфигурации (None - значения по умолчанию)
            verbose: Подробный вывод (уровень DEBUG)

        Returns:
            bool: True если инициализация успешна
        """
        try:
            self.config = load_config(config_path) if config_path else default_config()
            if verbose:
                self.config.logging.level = 'DEBUG'

            self.logger = RenamerLogger(self.config.logging)
            self.renamer = create_renamer(self.config.renamer, self.logger)

            if config_path:
                self.logger.log_system_info(f"Конфигурация загружена из: {config_path}")
            return True

        except (OSError, ValueError) as e:
            print(f"❌ Ошибка инициализации: {e}")
            return False

    def cmd_rename(self, start_dir: str) -> int:
        """
        Переименовывает файлы каталога.

        Args:
            start_dir: Обрабатываемый каталог

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        try:
            self.renamer.apply_to_all(start_dir)
            return 0
        except RenamerError as e:
            self.logger.log_critical_error("Обработка каталога прервана", e)
            print(f"❌ {e}")
            return 1


def check_arguments(start_dirs: List[str]) -> str:
    """
    Проверяет, что передан ровно один каталог.

    Raises:
        UsageError: Если каталогов не один
    """
    if len(start_dirs) != 1:
        raise UsageError(USAGE)
    return start_dirs[0]


class RenamerArgumentParser(argparse.ArgumentParser):
    """Парсер, сообщающий об ошибках разбора через UsageError."""

    def error(self, message):
        raise UsageError(USAGE)


def create_parser() -> argparse.ArgumentParser:
    """Создает парсер аргументов командной строки."""
    parser = RenamerArgumentParser(
        prog='prepend_filedate_to_filename',
        description='Добавляет дату изменения файла (YYYYMMDD) в начало его имени',
        usage='%(prog)s [--config CONFIG] [--verbose] <start dir>'
    )
    parser.add_argument(
        'start_dirs',
        nargs='*',
        metavar='start dir',
        help='Каталог с файлами для переименования'
    )
    parser.add_argument(
        '--config', '-c',
        default=None,
        help='Путь к файлу конфигурации (INI)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI."""
    parser = create_parser()

    try:
        # Нераспознанные аргументы считаются каталогами: "-data" тоже имя каталога
        args, unknown = parser.parse_known_args(argv)
        start_dir = check_arguments(args.start_dirs + unknown)
    except UsageError as e:
        print(e)
        return 1

    cli = RenamerCLI()
    if not cli.setup(args.config, args.verbose):
        return 1

    try:
        return cli.cmd_rename(start_dir)
    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
        return 1
    except Exception as e:
        print(f"❌ Неожиданная ошибка: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
