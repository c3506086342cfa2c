"""Модели результата поиска: кодек, параметры кодирования, артефакт и итог."""
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


class Codec(Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @property
    def pil_format(self) -> str:
        """Имя формата для `Image.save(format=...)`."""
        return {"jpeg": "JPEG", "png": "PNG", "webp": "WEBP"}[self.value]

    @property
    def extension(self) -> str:
        return {"jpeg": ".jpg", "png": ".png", "webp": ".webp"}[self.value]

    @property
    def label(self) -> str:
        return {"jpeg": "JPEG", "png": "PNG", "webp": "WebP"}[self.value]


class SearchState(Enum):
    SEARCHING = "searching"
    MET_BUDGET = "met_budget"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class EncodingKnobs:
    """Параметры одной попытки кодирования.

    Fields:
        scale: Множитель размеров (0, 1], десятичный без накопления ошибки.
        quality: Качество 1-100 для JPEG; None для PNG (без потерь) и WebP
            (управление качеством недоступно).
    """
    scale: Decimal
    quality: Optional[int] = None

    def with_scale(self, scale: Decimal) -> "EncodingKnobs":
        return replace(self, scale=scale)

    def with_quality(self, quality: int) -> "EncodingKnobs":
        return replace(self, quality=quality)

    def describe(self) -> str:
        if self.quality is None:
            return f"scale={self.scale}"
        return f"quality={self.quality}, scale={self.scale}"


@dataclass(frozen=True)
class EncodedArtifact:
    """Закодированный поток байт и параметры, на которых он получен."""
    data: bytes
    knobs: EncodingKnobs
    width: int
    height: int

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Attempt:
    """Запись об одной попытке: параметры и измеренный размер (без байтов)."""
    knobs: EncodingKnobs
    size: int


@dataclass(frozen=True)
class SearchOutcome:
    """Итог поиска. Возвращается всегда, даже если бюджет не достигнут.

    Fields:
        codec: Кодек, для которого шёл поиск.
        artifact: Последний (единственный сохранённый) артефакт.
        met_budget: True тогда и только тогда, когда `artifact.size <= budget`.
        budget: Запрошенный потолок, байт.
        attempts: Все попытки по порядку.
    """
    codec: Codec
    artifact: EncodedArtifact
    met_budget: bool
    budget: int
    attempts: Tuple[Attempt, ...]

    @property
    def state(self) -> SearchState:
        return SearchState.MET_BUDGET if self.met_budget else SearchState.EXHAUSTED

    @property
    def knobs(self) -> EncodingKnobs:
        return self.artifact.knobs
