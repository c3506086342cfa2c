"""Политики ужесточения параметров для каждого кодека.

Политика знает три вещи: стартовые параметры, как получить следующие (более
агрессивные) параметры и когда пространство параметров исчерпано. Политики не
хранят состояния: параметры передаются и возвращаются неизменяемыми значениями.

- JPEG: сначала качество 90 → 10 шагом 10, затем масштаб 1.0 → 0.1 шагом 0.1
  при качестве 10.
- PNG: только масштаб (формат без потерь), после кодирования всегда oxipng.
- WebP: только масштаб; качество в этом кодеке не регулируется.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from decimal import Decimal

from PIL import Image

from sizefit.models.compression_model import Codec, EncodingKnobs
from sizefit.models.settings import CompressionSettings, DEFAULT_SETTINGS
from sizefit.services.encoder_service import EncoderService


def _steps(start: Decimal | int, floor: Decimal | int, step: Decimal | int) -> int:
    """Сколько шагов нужно, чтобы дойти от start до floor."""
    if start <= floor:
        return 0
    return math.ceil((Decimal(start) - Decimal(floor)) / Decimal(step))


class KnobPolicy(ABC):
    codec: Codec

    def __init__(self, settings: CompressionSettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings

    @abstractmethod
    def initial(self) -> EncodingKnobs:
        """Параметры максимального качества."""

    @abstractmethod
    def is_exhausted(self, knobs: EncodingKnobs) -> bool:
        """True, если ужесточать больше нечего."""

    @abstractmethod
    def tighten(self, knobs: EncodingKnobs) -> EncodingKnobs:
        """Следующие параметры после неудачной попытки."""

    @abstractmethod
    def encode(self, encoder: EncoderService, image: Image.Image, knobs: EncodingKnobs) -> bytes:
        """Кодирует уже отмасштабированный растр с данными параметрами."""

    @property
    @abstractmethod
    def max_attempts(self) -> int:
        """Верхняя граница числа вызовов кодера за один поиск."""

    def _next_scale(self, knobs: EncodingKnobs) -> EncodingKnobs:
        s = self._settings
        return knobs.with_scale(max(s.scale_floor, knobs.scale - s.scale_step))

    def _scale_steps(self) -> int:
        s = self._settings
        return _steps(s.initial_scale, s.scale_floor, s.scale_step)


class JpegPolicy(KnobPolicy):
    codec = Codec.JPEG

    def initial(self) -> EncodingKnobs:
        return EncodingKnobs(scale=self._settings.initial_scale, quality=self._settings.initial_quality)

    def is_exhausted(self, knobs: EncodingKnobs) -> bool:
        s = self._settings
        return knobs.quality <= s.quality_floor and knobs.scale <= s.scale_floor

    def tighten(self, knobs: EncodingKnobs) -> EncodingKnobs:
        s = self._settings
        if knobs.quality > s.quality_floor:
            return knobs.with_quality(max(s.quality_floor, knobs.quality - s.quality_step))
        return self._next_scale(knobs)

    def encode(self, encoder: EncoderService, image: Image.Image, knobs: EncodingKnobs) -> bytes:
        return encoder.encode_jpeg(image, knobs.quality)

    @property
    def max_attempts(self) -> int:
        s = self._settings
        return 1 + _steps(s.initial_quality, s.quality_floor, s.quality_step) + self._scale_steps()


class _ScaleOnlyPolicy(KnobPolicy):
    """Общая часть PNG и WebP: обходится только масштаб."""

    def initial(self) -> EncodingKnobs:
        return EncodingKnobs(scale=self._settings.initial_scale)

    def is_exhausted(self, knobs: EncodingKnobs) -> bool:
        return knobs.scale <= self._settings.scale_floor

    def tighten(self, knobs: EncodingKnobs) -> EncodingKnobs:
        return self._next_scale(knobs)

    @property
    def max_attempts(self) -> int:
        return 1 + self._scale_steps()


class PngPolicy(_ScaleOnlyPolicy):
    codec = Codec.PNG

    def encode(self, encoder: EncoderService, image: Image.Image, knobs: EncodingKnobs) -> bytes:
        # oxipng is lossless and never grows the stream, so it always runs
        return encoder.optimize_png(encoder.encode_png(image))


class WebpPolicy(_ScaleOnlyPolicy):
    codec = Codec.WEBP

    def encode(self, encoder: EncoderService, image: Image.Image, knobs: EncodingKnobs) -> bytes:
        return encoder.encode_webp(image)


_POLICIES = {
    Codec.JPEG: JpegPolicy,
    Codec.PNG: PngPolicy,
    Codec.WEBP: WebpPolicy,
}


def policy_for(codec: Codec, settings: CompressionSettings = DEFAULT_SETTINGS) -> KnobPolicy:
    return _POLICIES[codec](settings)
