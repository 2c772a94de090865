"""Transition cues synthesised with numpy and played with QSoundEffect.

Every cue is a short sequence of sine notes shaped by an ADSR envelope,
rendered once to a 16-bit mono WAV in the sound cache and reused on later
launches.

Sound names
-----------
- ``focus_start``       — three rising notes, back to work
- ``break_start``       — one soft bell
- ``long_break_start``  — four-note arpeggio with a held top note
- ``click``             — tiny tick for UI feedback
"""

from __future__ import annotations

import io
import logging
import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR


logger = logging.getLogger(__name__)

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
SAMPLE_RATE = 44100


@dataclass(frozen=True)
class Note:
    freq: float
    seconds: float
    gain: float = 0.5
    overtone: float = 0.0      # gain of the octave above, 0 for none
    gap: float = 0.03          # silence after the note
    sustain: float = 0.4
    release: float = 0.3       # fraction of the note spent fading out


CUES: dict[str, tuple[Note, ...]] = {
    "focus_start": (
        Note(523.25, 0.12, 0.6),
        Note(659.25, 0.12, 0.6),
        Note(783.99, 0.12, 0.6, gap=0.08),
    ),
    "break_start": (
        Note(440.0, 1.0, 0.35, overtone=0.08, gap=0.0, sustain=0.25, release=0.55),
    ),
    "long_break_start": (
        Note(523.25, 0.10, gap=0.02, sustain=0.3),
        Note(659.25, 0.10, gap=0.02, sustain=0.3),
        Note(783.99, 0.10, gap=0.02, sustain=0.3),
        Note(1046.50, 0.35, overtone=0.1, gap=0.0, sustain=0.5, release=0.5),
    ),
    "click": (
        Note(1200.0, 0.015, 0.2, gap=0.03, sustain=0.0, release=0.6),
    ),
}

SOUND_NAMES = tuple(CUES)


# ═══════════════════════════════════════════════════════════════════════════
#  SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def envelope(length: int, sustain: float, release: float) -> np.ndarray:
    """Attack/decay/sustain/release curve over *length* samples.

    Attack and decay take a fixed 5% and 15% of the note; *release* is a
    fraction of the note.
    """
    env = np.full(length, sustain, dtype=np.float64)
    a = int(length * 0.05)
    d = int(length * 0.15)
    r = min(int(length * release), length - a - d)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    if d > 0:
        env[a:a + d] = np.linspace(1.0, sustain, d)
    if r > 0:
        env[length - r:] = np.linspace(sustain, 0.0, r)
    return env


def render(notes: tuple[Note, ...]) -> np.ndarray:
    """Concatenate *notes* into one float64 buffer in -1..1."""
    parts: list[np.ndarray] = []
    for note in notes:
        t = np.arange(int(SAMPLE_RATE * note.seconds)) / SAMPLE_RATE
        tone = np.sin(2 * np.pi * note.freq * t) * note.gain
        if note.overtone:
            tone += np.sin(4 * np.pi * note.freq * t) * note.overtone
        parts.append(tone * envelope(len(tone), note.sustain, note.release))
        parts.append(np.zeros(int(SAMPLE_RATE * note.gap)))
    return np.concatenate(parts)


def to_wav_bytes(samples: np.ndarray) -> bytes:
    """16-bit PCM mono WAV from float samples."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Caches the cue WAVs and plays them.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("break_start")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_volume(self, level: int) -> None:
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """No-op if disabled or *name* is unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("no sound loaded for %r", name)
            return
        effect.play()

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, notes in CUES.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(to_wav_bytes(render(notes)))

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
