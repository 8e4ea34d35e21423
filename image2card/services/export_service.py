"""Export service for writing flashcard records to disk."""

import json
import logging
from datetime import datetime
from pathlib import Path

from image2card.config import Image2CardConfig
from image2card.models import FlashcardRecord
from image2card.utils import ensure_directory, safe_filename

logger = logging.getLogger(__name__)


class ExportService:
    """Write each flashcard as a folder holding card.json and its media files."""

    def __init__(self, config: Image2CardConfig):
        self.config = config

    def export_record(
        self,
        record: FlashcardRecord,
        output_dir: Path | None = None,
        name: str = "",
    ) -> Path:
        """Export one flashcard.

        Args:
            record: Processed flashcard
            output_dir: Parent directory (defaults to config.output_dir)
            name: Folder name; defaults to a timestamp plus the target word

        Returns:
            Path of the card folder
        """
        parent = output_dir or self.config.output_dir
        if not name:
            name = f"{datetime.now():%Y%m%d_%H%M%S}_{record.target_word}"
        card_dir = ensure_directory(parent / safe_filename(name, fallback="card"))

        media = [
            (record.image_filename, record.image),
            (record.vocab_audio_filename, record.vocab_audio),
            (record.sentence_audio_filename, record.sentence_audio),
        ]
        for filename, data in media:
            if filename and data:
                (card_dir / safe_filename(filename)).write_bytes(data)

        fields = record.to_fields()
        for key in ("image", "vocab_audio", "sentence_audio"):
            if fields[key]:
                fields[key] = safe_filename(fields[key])

        (card_dir / "card.json").write_text(
            json.dumps(fields, ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        logger.info(f"Exported card '{record.target_word}' to {card_dir}")
        return card_dir
