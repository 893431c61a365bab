"""
HSK Study – Text-to-speech
===========================
Synthesises Mandarin audio with gTTS and plays it through whatever audio
player the platform offers. Starting a new utterance stops the one that
is still playing.
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import subprocess
import sys
import tempfile
import threading
from typing import List

from gtts import gTTS

from core.errors import SpeechUnsupported

log = logging.getLogger(__name__)

SPEECH_LANG = "zh"          # Mandarin
SPEECH_SLOW = True          # learners get the slowed-down voice

_AUDIO_DIR = os.path.join(tempfile.gettempdir(), "hskstudy_audio")

# Players tried in order on non-Windows platforms.
_PLAYERS = (
    ("afplay",),
    ("mpg123", "-q"),
    ("ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"),
    ("mpv", "--no-video", "--really-quiet"),
)


def _player_command(path: str) -> List[str] | None:
    """Return the command that plays *path*, or None if nothing can."""
    if sys.platform.startswith("win"):
        if shutil.which("powershell") is None:
            return None
        return [
            "powershell", "-WindowStyle", "Hidden", "-Command",
            "Add-Type -AssemblyName presentationCore;"
            "$p=New-Object System.Windows.Media.MediaPlayer;"
            f"$p.Open('{path}');$p.Play();Start-Sleep -Seconds 5",
        ]
    for player in _PLAYERS:
        if shutil.which(player[0]):
            return [*player, path]
    return None


class Speaker:
    """Injected speech capability used by the study session."""

    def __init__(self, audio_dir: str = _AUDIO_DIR, *, threaded: bool = True) -> None:
        self._audio_dir = audio_dir
        self._threaded = threaded
        self._lock = threading.Lock()
        self._proc: subprocess.Popen | None = None
        self._generation = 0

    def is_supported(self) -> bool:
        return _player_command(self._audio_dir) is not None

    def speak(self, text: str) -> None:
        """Say *text*, cutting off anything still playing.

        Raises ``SpeechUnsupported`` when no audio player is available.
        """
        text = text.strip()
        if not text:
            return
        if not self.is_supported():
            raise SpeechUnsupported(
                "Text-to-speech needs an audio player (mpg123, ffplay or mpv)."
            )

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._stop_locked()

        if self._threaded:
            threading.Thread(
                target=self._synthesize_and_play, args=(text, generation), daemon=True,
            ).start()
        else:
            self._synthesize_and_play(text, generation)

    def cancel(self) -> None:
        """Stop the current utterance, if any."""
        with self._lock:
            self._generation += 1
            self._stop_locked()

    # ── internals ─────────────────────────────────────────────────────
    def _stop_locked(self) -> None:
        if self._proc is not None and self._proc.poll() is None:
            self._proc.terminate()
        self._proc = None

    def _cache_path(self, text: str) -> str:
        digest = hashlib.sha1(f"{SPEECH_LANG}:{SPEECH_SLOW}:{text}".encode("utf-8")).hexdigest()
        return os.path.join(self._audio_dir, f"{digest[:16]}.mp3")

    def _synthesize(self, text: str, fp: str) -> None:
        """Write the MP3 for *text* to *fp*; nothing lands at *fp* on failure."""
        part = fp + ".part"
        try:
            gTTS(text=text, lang=SPEECH_LANG, slow=SPEECH_SLOW).save(part)
            os.replace(part, fp)
        finally:
            if os.path.exists(part):
                os.remove(part)

    def _synthesize_and_play(self, text: str, generation: int) -> None:
        try:
            os.makedirs(self._audio_dir, exist_ok=True)
            fp = self._cache_path(text)
            if not os.path.exists(fp) or os.path.getsize(fp) == 0:
                self._synthesize(text, fp)
            cmd = _player_command(fp)
            if cmd is None:
                log.warning("No audio player available for %s", fp)
                return
            with self._lock:
                if generation != self._generation:
                    return      # superseded while synthesising
                self._proc = subprocess.Popen(
                    cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
                )
        except Exception as e:
            log.warning("TTS failed: %s", e)
