"""Разбор человекочитаемого размера ("500KB", "1MB", "2 MiB") в байты.

Десятичные единицы (K/KB ... P/PB) — степени 1000,
двоичные (KiB ... PiB) — степени 1024. Регистр не важен.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

_SIZE_RE = re.compile(r"^\s*(?P<number>\d+(?:\.\d*)?|\.\d+)\s*(?P<unit>[a-z]*)\s*$", re.IGNORECASE)

_UNITS = {
    "": 1,
    "b": 1,
    "k": 1000,
    "kb": 1000,
    "m": 1000**2,
    "mb": 1000**2,
    "g": 1000**3,
    "gb": 1000**3,
    "t": 1000**4,
    "tb": 1000**4,
    "p": 1000**5,
    "pb": 1000**5,
    "kib": 1024,
    "mib": 1024**2,
    "gib": 1024**3,
    "tib": 1024**4,
    "pib": 1024**5,
}


def parse_size(text: str) -> int:
    """Возвращает целое число байт (дробная часть отбрасывается).

    Raises:
        ValueError: если строка не распознана или размер не положителен.
    """
    match = _SIZE_RE.match(text or "")
    if match is None:
        raise ValueError(f"Некорректный размер: {text!r}")
    unit = match.group("unit").lower()
    if unit not in _UNITS:
        raise ValueError(f"Неизвестная единица размера {match.group('unit')!r} в {text!r}")
    try:
        number = Decimal(match.group("number"))
    except InvalidOperation as exc:
        raise ValueError(f"Некорректный размер: {text!r}") from exc

    size = int(number * _UNITS[unit])
    if size <= 0:
        raise ValueError(f"Размер должен быть положительным: {text!r}")
    return size


def format_size(size_bytes: int | None) -> str:
    """Короткая подпись размера для отчётов: 512 Б, 1.5 КБ, 2.0 МБ."""
    if size_bytes is None:
        return "—"
    thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
    for label, limit in thresholds:
        if size_bytes < limit:
            if label == "Б":
                return f"{size_bytes} {label}"
            value = size_bytes / (limit // 1024)
            return f"{value:.1f} {label}"
    value = size_bytes / (1024**4)
    return f"{value:.1f} ГБ"
