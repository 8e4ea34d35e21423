"""JMdict offline dictionary provider."""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from image2card.exceptions import SetupError
from image2card.models import DictionaryEntry

logger = logging.getLogger(__name__)

MAX_SENSES = 5


@dataclass(frozen=True)
class _Senses:
    """Parsed senses of one JMdict entry, shared by all of its headwords."""

    glosses: tuple[str, ...]
    part_of_speech: str
    reading: str


def _parse_entry(entry: ET.Element) -> tuple[list[str], _Senses | None]:
    headwords = [keb.text for keb in entry.iterfind("k_ele/keb") if keb.text]
    readings = [reb.text for reb in entry.iterfind("r_ele/reb") if reb.text]

    glosses = []
    part_of_speech = ""
    for sense in entry.iterfind("sense"):
        texts = [g.text for g in sense.iterfind("gloss") if g.text]
        if texts:
            glosses.append("; ".join(texts))
        if not part_of_speech:
            part_of_speech = sense.findtext("pos") or ""

    if not glosses:
        return [], None
    return headwords + readings, _Senses(tuple(glosses), part_of_speech, readings[0] if readings else "")


class JMdictProvider:
    """Offline dictionary provider using JMdict XML file.

    Implements DictionaryProvider protocol. The file is streamed entry by
    entry, so only the extracted glosses stay in memory.
    """

    def __init__(self, jmdict_path: Path):
        """Initialize with path to JMdict XML file.

        Args:
            jmdict_path: Path to the JMdict XML file.
        """
        self._path = jmdict_path
        self._index: dict[str, _Senses] | None = None

    @property
    def name(self) -> str:
        return "JMdict Offline"

    def is_available(self) -> bool:
        return self._index is not None

    def load(self) -> bool:
        """Parse the JMdict XML file into a headword index.

        Kanji and kana headwords both point at their entry's senses; when a
        headword appears in several entries the first one wins.

        Returns:
            True if loaded successfully.

        Raises:
            SetupError: If file not found or XML parse error.
        """
        if not self._path.exists():
            raise SetupError(
                f"JMdict file not found at: {self._path}. "
                f"Download from http://ftp.edrdg.org/pub/Nihongo/ and decompress with: gunzip JMdict_e.gz"
            )

        index: dict[str, _Senses] = {}
        try:
            for _, element in ET.iterparse(str(self._path), events=("end",)):
                if element.tag != "entry":
                    continue
                headwords, senses = _parse_entry(element)
                if senses is not None:
                    for headword in headwords:
                        index.setdefault(headword, senses)
                element.clear()
        except ET.ParseError as e:
            raise SetupError(f"Error parsing JMdict XML: {e}") from e
        except OSError as e:
            raise SetupError(f"Error loading JMdict: {e}") from e

        self._index = index
        logger.info(f"Loaded {len(index)} JMdict headwords")
        return True

    def lookup(self, word: str) -> DictionaryEntry | None:
        """Look up word in the loaded JMdict index.

        Returns:
            DictionaryEntry with up to MAX_SENSES numbered senses, or None.
        """
        senses = self._index.get(word) if self._index else None
        if senses is None:
            return None

        numbered = [f"{i}. {gloss}" for i, gloss in enumerate(senses.glosses[:MAX_SENSES], 1)]
        return DictionaryEntry(
            headword=word,
            definition="<br>".join(numbered),
            part_of_speech=senses.part_of_speech,
            reading=senses.reading,
        )
