from __future__ import annotations

import json
import logging
import os
from typing import List

from domain.models import BoxPoint, RecognitionOutcome, RecognizedFragment

logger = logging.getLogger(__name__)


def parse_fragments(raw: list) -> List[RecognizedFragment]:
    fragments: List[RecognizedFragment] = []
    for item in raw:
        text = item.get("text", "")
        points = [BoxPoint(int(p[0]), int(p[1])) for p in item.get("box_points") or []]
        fragments.append(RecognizedFragment(text=text, box_points=points))
    return fragments


class JsonFileOcr:
    """OCR results produced by an external engine and handed over as JSON.

    Expected layout::

        {"text": "...", "fragments": [{"text": "...", "box_points": [[x, y], ...]}]}
    """

    def __init__(self, result_path: str):
        self._result_path = result_path

    async def recognize(self, image_bytes: bytes, language: str) -> RecognitionOutcome:
        if not os.path.isfile(self._result_path):
            logger.warning(f"OCR result not found: {self._result_path}")
            return RecognitionOutcome(success=False)
        try:
            with open(self._result_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Unreadable OCR result {self._result_path}: {exc}")
            return RecognitionOutcome(success=False)

        fragments = parse_fragments(data.get("fragments") or [])
        text = data.get("text") or "\n".join(f.text for f in fragments)
        return RecognitionOutcome(success=True, text=text, fragments=fragments)
