"""
HSK Study – Static data loader
===============================
Reads the three leveled vocabulary files and the optional sentence file
from the data directory and builds the in-memory ``Catalog``.

The four reads run concurrently and are joined before a catalog exists,
so callers never see a partially loaded one.
"""

from __future__ import annotations

import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List

from core.errors import DataLoadFailure, SentenceDataUnavailable
from core.models import LEVELS, Catalog, SentenceItem, VocabularyItem

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Resolve the data directory, also when packaged with PyInstaller.
# ---------------------------------------------------------------------------

def _app_data_dir() -> Path:
    """Return the directory holding the bundled JSON files."""
    if getattr(sys, "frozen", False):
        # Running as a PyInstaller bundle
        base = Path(sys.executable).parent
    else:
        # Package data of core/
        base = Path(__file__).resolve().parent
    return base / "data"


DATA_DIR = _app_data_dir()
VOCABULARY_FILES: Dict[int, str] = {level: f"hsk{level}.json" for level in LEVELS}
SENTENCES_FILE = "sentences.json"


# ---------------------------------------------------------------------------
# Record parsing
# ---------------------------------------------------------------------------

def _field(raw: Dict[str, Any], *names: str) -> str:
    for name in names:
        if name in raw and raw[name] is not None:
            return str(raw[name]).strip()
    return ""


def vocabulary_from_dict(raw: Any) -> VocabularyItem:
    """Build a vocabulary item from one JSON record.

    Accepts the short keys used by the data files (``char``, ``pinyin``)
    as well as ``character`` / ``pronunciation``.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Vocabulary record must be an object, got {type(raw).__name__}")
    character = _field(raw, "char", "character")
    if not character:
        raise ValueError(f"Vocabulary record has no character: {raw!r}")
    return VocabularyItem(
        character=character,
        pronunciation=_field(raw, "pinyin", "pronunciation"),
        meaning=_field(raw, "meaning"),
    )


def sentence_from_dict(raw: Any) -> SentenceItem:
    """Build a sentence item from one JSON record (``chinese`` / ``english``)."""
    if not isinstance(raw, dict):
        raise ValueError(f"Sentence record must be an object, got {type(raw).__name__}")
    source = _field(raw, "chinese", "source")
    if not source:
        raise ValueError(f"Sentence record has no text: {raw!r}")
    return SentenceItem(source=source, translation=_field(raw, "english", "translation"))


# ---------------------------------------------------------------------------
# File readers
# ---------------------------------------------------------------------------

def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8-sig"))


def read_vocabulary(path: Path) -> List[VocabularyItem]:
    """Read one level's vocabulary file; any problem is a ``DataLoadFailure``."""
    try:
        raw = _read_json(path)
    except FileNotFoundError:
        raise DataLoadFailure(f"Vocabulary file not found: {path.name}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadFailure(f"Could not read {path.name}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DataLoadFailure(f"{path.name} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise DataLoadFailure(f"{path.name} must contain a list of words")
    try:
        items = [vocabulary_from_dict(record) for record in raw]
    except ValueError as exc:
        raise DataLoadFailure(f"{path.name}: {exc}") from exc

    log.info("Loaded %d words from %s", len(items), path.name)
    return items


def read_sentences(path: Path) -> Dict[int, List[SentenceItem]]:
    """Read the sentence file, keyed by level.

    Raises ``SentenceDataUnavailable`` when the file is missing or malformed.
    """
    try:
        raw = _read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SentenceDataUnavailable(f"{path.name}: {exc}") from exc

    if not isinstance(raw, dict):
        raise SentenceDataUnavailable(f"{path.name} must map levels to sentence lists")

    sentences: Dict[int, List[SentenceItem]] = {}
    try:
        for level in LEVELS:
            records = raw.get(str(level), [])
            if not isinstance(records, list):
                raise ValueError(f"level {level} is not a list")
            sentences[level] = [sentence_from_dict(record) for record in records]
    except ValueError as exc:
        raise SentenceDataUnavailable(f"{path.name}: {exc}") from exc

    log.info(
        "Loaded sentences from %s (%s)", path.name,
        ", ".join(f"level {lv}: {len(items)}" for lv, items in sentences.items()),
    )
    return sentences


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class DataLoader:
    """Loads the catalog once; ``restart()`` throws it away and loads again."""

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.catalog: Catalog | None = None

    def load(self) -> Catalog:
        """Read every file concurrently and build the catalog.

        Raises ``DataLoadFailure`` if any vocabulary file fails. A broken or
        missing sentence file only empties reading mode.
        """
        log.info("Loading study data from %s", self.data_dir)
        with ThreadPoolExecutor(max_workers=len(LEVELS) + 1) as pool:
            vocab_jobs = {
                level: pool.submit(read_vocabulary, self.data_dir / name)
                for level, name in VOCABULARY_FILES.items()
            }
            sentence_job = pool.submit(read_sentences, self.data_dir / SENTENCES_FILE)
        # Leaving the pool waits for all four reads.

        vocabulary: Dict[int, List[VocabularyItem]] = {}
        for level, job in vocab_jobs.items():
            try:
                vocabulary[level] = job.result()
            except DataLoadFailure as exc:
                log.error("Failed to load level %d vocabulary: %s", level, exc)
                raise

        try:
            sentences = sentence_job.result()
            available = True
        except SentenceDataUnavailable as exc:
            log.warning("Reading practice disabled: %s", exc)
            sentences = {level: [] for level in LEVELS}
            available = False

        self.catalog = Catalog(
            vocabulary=vocabulary,
            sentences=sentences,
            sentences_available=available,
        )
        return self.catalog

    def restart(self) -> Catalog:
        """Discard any previous catalog and load from scratch."""
        log.info("Reloading study data")
        self.catalog = None
        return self.load()
