"""Командная строка: sizefit INPUT OUTPUT --ms 500KB [--format auto|jpeg|png|webp].

Код возврата 0 — файл записан (бюджет достигнут или нет, второе — лишь
предупреждение), 1 — ошибка конфигурации, декодирования, кодирования или
ввода-вывода, 2 — неверные аргументы (argparse).
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from sizefit.models.compression_model import SearchOutcome
from sizefit.services.format_service import FORMAT_CHOICES, select_codec
from sizefit.services.image_service import ImageService
from sizefit.services.metrics import decode, psnr
from sizefit.services.search_service import SearchService
from sizefit.services.size_parser import parse_size

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sizefit",
        description="Сжать изображение так, чтобы файл не превышал заданный размер.",
    )
    parser.add_argument("input", help="Исходное изображение")
    parser.add_argument("output", help="Файл результата")
    parser.add_argument(
        "--ms",
        "--max-size",
        dest="max_size",
        required=True,
        help="Максимальный размер, например 500KB, 1MB, 2MiB",
    )
    parser.add_argument(
        "--format",
        choices=FORMAT_CHOICES,
        default="auto",
        help="Формат результата (по умолчанию — по расширению OUTPUT, иначе JPEG)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог каждой попытки")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def run(args: argparse.Namespace) -> int:
    """Выполняет сжатие по разобранным аргументам и печатает отчёт."""
    image_service = ImageService()

    budget = parse_size(args.max_size)
    print(f"Целевой размер: {budget} байт")

    image_data = image_service.load_image(args.input)
    image_service.require_output_dir(args.output)
    codec = select_codec(args.format, args.output)
    print(f"Формат: {codec.label}")

    outcome = SearchService().search(image_data.pil_image, budget, codec)
    final_size = image_service.save_bytes(args.output, outcome.artifact.data)
    _report(outcome, final_size, psnr(image_data.pil_image, decode(outcome.artifact.data)))
    return 0


def _report(outcome: SearchOutcome, final_size: int, quality_db: float) -> None:
    artifact = outcome.artifact
    print(f"Параметры: {artifact.knobs.describe()} ({artifact.width}x{artifact.height}), попыток: {len(outcome.attempts)}")
    print(f"Итоговый размер: {final_size} байт")
    print(f"PSNR: {quality_db:.2f} дБ")
    if final_size > outcome.budget:
        logger.warning("budget of %d bytes not met (%d bytes written)", outcome.budget, final_size)
        print("Предупреждение: не удалось уложиться в заданный размер в пределах допустимых параметров.")
    else:
        print("Готово: изображение сжато в пределах заданного размера.")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        return run(args)
    except (ValueError, OSError) as exc:
        # FileNotFoundError is an OSError
        if args.verbose:
            logger.exception("compression failed")
        else:
            logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
