from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

ENV_PREFIX = "OVERLAY_"


@dataclass(frozen=True)
class OverlayConfig:
    """Runtime settings shared by the CLI and the GUI."""

    ocr_language: str = "auto"
    target_lang: str = "en"
    fallback_target_lang: str = "zh"
    """Target used when the detected source already is ``target_lang``."""
    translator_url: str = "http://127.0.0.1:5000/translate"
    translator_api_key: str = ""
    translator_timeout: float = 15.0
    max_concurrency: Optional[int] = None
    """``None`` means ``os.cpu_count()``."""
    min_font_size: float = 6.0
    max_font_size: float = 48.0

    @classmethod
    def from_env(cls) -> "OverlayConfig":
        """Build a config from ``OVERLAY_*`` environment variables."""
        overrides = {}
        for f in fields(cls):
            raw = os.environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            if f.name == "max_concurrency":
                overrides[f.name] = int(raw)
            elif f.name in ("translator_timeout", "min_font_size", "max_font_size"):
                overrides[f.name] = float(raw)
            else:
                overrides[f.name] = raw
        return cls(**overrides)

    def merged(self, **overrides) -> "OverlayConfig":
        """Copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def concurrency(self) -> int:
        return max(1, self.max_concurrency or os.cpu_count() or 1)
