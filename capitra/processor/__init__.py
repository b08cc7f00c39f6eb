# processor/__init__.py
from capitra.processor.models import (
    Chapter,
    ChapterSeed,
    ChapterStatus,
    Job,
    TranslationProfile,
)
from capitra.processor.segmenter import ChapterSegmenter, segment

__all__ = [
    "Chapter", "ChapterSeed", "ChapterStatus", "Job", "TranslationProfile",
    "ChapterSegmenter", "segment",
]
