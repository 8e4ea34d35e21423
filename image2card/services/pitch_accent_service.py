"""Service for loading, looking up and formatting pitch accent data."""

import csv
import logging
from pathlib import Path

from image2card.exceptions import SetupError
from image2card.models import PitchAccentEntry
from image2card.utils import katakana_to_hiragana

logger = logging.getLogger(__name__)

# Small kana merge with the preceding kana into one mora
_SMALL_KANA = set("ゃゅょぁぃぅぇぉゎャュョァィゥェォヮ")


def split_morae(reading: str) -> list[str]:
    """Split a kana reading into morae ("きょう" -> ["きょ", "う"])."""
    morae: list[str] = []
    for ch in reading:
        if ch in _SMALL_KANA and morae:
            morae[-1] += ch
        else:
            morae.append(ch)
    return morae


def mora_pitches(mora_count: int, pattern: int) -> list[bool]:
    """High/low pitch of each mora for a downstep pattern (True = high).

    0 (heiban): low then high to the end. 1 (atamadaka): first mora high.
    n: low, high through mora n, low afterwards.
    """
    if mora_count == 0:
        return []
    if pattern == 1:
        return [True] + [False] * (mora_count - 1)
    pitches = [False]
    for i in range(2, mora_count + 1):
        pitches.append(pattern == 0 or i <= pattern)
    return pitches


class PitchAccentService:
    """Load and look up pitch accent patterns from Kanjium-format CSV.

    The Kanjium pitch accent CSV format has columns:
    - reading (kana)
    - kanji (or kana if no kanji)
    - pitch_pattern (e.g., "0", or "0,2" for words with several accents)
    """

    def __init__(self, pitch_accent_path: Path):
        """Initialize with path to pitch accent CSV.

        Args:
            pitch_accent_path: Path to the Kanjium pitch accent CSV file.
        """
        self._path = pitch_accent_path
        self._entries: dict[tuple[str, str], list[PitchAccentEntry]] | None = None
        self._by_headword: dict[str, list[PitchAccentEntry]] = {}

    def load(self) -> bool:
        """Load pitch accent data from CSV file.

        Returns:
            True if loaded successfully.

        Raises:
            SetupError: If the file is missing or unparseable.
        """
        if not self._path.exists():
            raise SetupError(
                f"Pitch accent file not found at: {self._path}. "
                f"Download the Kanjium pitch accent data and place it in ~/.image2card/"
            )

        entries: dict[tuple[str, str], list[PitchAccentEntry]] = {}
        by_headword: dict[str, list[PitchAccentEntry]] = {}
        try:
            with open(self._path, encoding="utf-8") as f:
                reader = csv.reader(f)
                for row in reader:
                    if len(row) < 3:
                        continue
                    reading = katakana_to_hiragana(row[0].strip())
                    headword = row[1].strip() or reading
                    if not reading or not headword:
                        continue
                    key = (headword, reading)
                    if key in entries:
                        # First entry wins on duplicate keys
                        continue
                    parsed = [
                        PitchAccentEntry(headword, reading, int(p))
                        for p in row[2].replace(" ", "").split(",")
                        if p.isdigit()
                    ]
                    if not parsed:
                        continue
                    entries[key] = parsed
                    by_headword.setdefault(headword, []).extend(parsed)
                    # Kana-keyed alias so (reading, reading) lookups find kanji words
                    entries.setdefault((reading, reading), parsed)

            self._entries = entries
            self._by_headword = by_headword
            logger.info(f"Loaded {len(entries)} pitch accent entries")
            return True

        except Exception as e:
            raise SetupError(f"Error loading pitch accent data: {e}") from e

    def is_available(self) -> bool:
        """Check if pitch accent data has been loaded."""
        return self._entries is not None

    def lookup(self, headword: str, reading: str = "") -> list[PitchAccentEntry]:
        """Look up pitch accent entries for a headword.

        Args:
            headword: Word to look up (kanji or kana form).
            reading: Kana reading; when empty every reading of the headword matches.

        Returns:
            Matching entries (empty if none).
        """
        if not self._entries or not headword:
            return []

        if not reading:
            return list(self._by_headword.get(headword, []))

        return list(self._entries.get((headword, katakana_to_hiragana(reading)), []))

    def format_as_markup(self, entries: list[PitchAccentEntry]) -> str:
        """Render entries as HTML with an overline over high morae.

        Each entry becomes one line: the reading with high morae overlined, a
        downstep marker after the accented mora, then the pattern number.

        Args:
            entries: Entries returned by lookup().

        Returns:
            HTML string, one entry per line joined by "<br>" (empty for no entries).
        """
        lines = []
        for entry in entries:
            morae = split_morae(entry.reading)
            pitches = mora_pitches(len(morae), entry.pattern)
            parts = []
            for i, (mora, high) in enumerate(zip(morae, pitches, strict=True), 1):
                if high:
                    parts.append(f'<span style="text-decoration: overline;">{mora}</span>')
                else:
                    parts.append(mora)
                if i == entry.pattern:
                    parts.append("ꜜ")
            lines.append(f"{''.join(parts)} [{entry.pattern}]")
        return "<br>".join(lines)
