"""Поиск параметров кодирования под ограничение размера файла.

Цикл один для всех кодеков, отличаются только политики (`search_policy`):
масштабировать → закодировать → измерить → остановиться или ужесточить.
Ошибки кодеров и ресэмплинга не перехватываются: повтор с другими параметрами
на нечитаемом или вырожденном растре всё равно не поможет.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from PIL import Image

from sizefit.models.compression_model import Attempt, Codec, EncodedArtifact, EncodingKnobs, SearchOutcome
from sizefit.models.settings import CompressionSettings, DEFAULT_SETTINGS
from sizefit.services.encoder_service import EncoderService
from sizefit.services.search_policy import KnobPolicy, policy_for

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(
        self,
        encoder: Optional[EncoderService] = None,
        settings: CompressionSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._settings = settings
        self._encoder = encoder if encoder is not None else EncoderService(settings)

    def search(self, image: Image.Image, budget: int, codec: Codec) -> SearchOutcome:
        """Подбирает параметры так, чтобы размер результата был <= budget.

        Args:
            image: Исходный растр; не изменяется.
            budget: Потолок размера в байтах (> 0, проверяет вызывающий).
            codec: Целевой кодек.

        Returns:
            `SearchOutcome` с последним артефактом. Если бюджет не достигнут даже
            на самых агрессивных параметрах, `met_budget=False` — это не ошибка.
        """
        policy = policy_for(codec, self._settings)
        knobs = policy.initial()
        attempts: List[Attempt] = []

        while True:
            artifact = self._attempt(policy, image, knobs)
            attempts.append(Attempt(knobs=knobs, size=artifact.size))
            logger.debug(
                "%s attempt %d: %s, %dx%d -> %d bytes (budget %d)",
                codec.label, len(attempts), knobs.describe(), artifact.width, artifact.height, artifact.size, budget,
            )

            met_budget = artifact.size <= budget
            if met_budget or policy.is_exhausted(knobs):
                if not met_budget:
                    logger.debug("%s knob space exhausted at %s", codec.label, knobs.describe())
                return SearchOutcome(
                    codec=codec,
                    artifact=artifact,
                    met_budget=met_budget,
                    budget=budget,
                    attempts=tuple(attempts),
                )
            knobs = policy.tighten(knobs)

    def _attempt(self, policy: KnobPolicy, image: Image.Image, knobs: EncodingKnobs) -> EncodedArtifact:
        working = image if knobs.scale >= 1 else self._encoder.resize(image, knobs.scale)
        data = policy.encode(self._encoder, working, knobs)
        width, height = working.size
        return EncodedArtifact(data=data, knobs=knobs, width=width, height=height)
