"""
Prepend Filedate

Утилита добавляет дату последнего изменения файла (YYYYMMDD) в начало его имени.
"""

__version__ = "1.0.0"
