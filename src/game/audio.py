"""
Sound Effects
=============

Retro sound effects synthesized with numpy and played through pygame.mixer.

The session only sees the AudioSink interface: play(effect, **params) is
fire-and-forget and never raises. When the mixer is unavailable (no audio
device, --mute, headless tests) SoundEffects quietly does nothing, and
NullAudio can be injected directly.

Effects:
    SHOOT       - Short square-wave chirp sweeping 800 -> 200 Hz
    EXPLOSION   - Low-passed noise burst, darker for bigger asteroids (size=radius)
    SHIP_DEATH  - Soft sine rumble sweeping 200 -> 50 Hz
    GAME_OVER   - Descending sine 440 -> 110 Hz
"""

from enum import Enum
from typing import Dict, Optional, Protocol

import numpy as np
import pygame

from config import Config
from src.utils.logger import get_logger

logger = get_logger(__name__)


class SoundEffect(Enum):
    """Sound cues the game can request."""
    SHOOT = 'shoot'
    EXPLOSION = 'explosion'
    SHIP_DEATH = 'ship_death'
    GAME_OVER = 'game_over'


class AudioSink(Protocol):
    """Anything that can play a sound effect."""

    def play(self, effect: SoundEffect, **params) -> None:
        ...


class NullAudio:
    """Audio sink that plays nothing."""

    def play(self, effect: SoundEffect, **params) -> None:
        pass

    def close(self) -> None:
        pass


# =============================================================================
# SYNTHESIS
# =============================================================================

def _exp_ramp(start: float, end: float, duration: float, t: np.ndarray) -> np.ndarray:
    """Exponential ramp from start to end over duration, held at end afterwards."""
    progress = np.clip(t / duration, 0.0, 1.0)
    return start * (end / start) ** progress


def _sweep_phase(freq: np.ndarray, sample_rate: int) -> np.ndarray:
    """Phase of an oscillator whose frequency changes per sample."""
    return 2 * np.pi * np.cumsum(freq) / sample_rate


def synth_shoot(sample_rate: int) -> np.ndarray:
    """Square wave laser chirp."""
    duration = 0.1
    t = np.arange(int(duration * sample_rate)) / sample_rate
    freq = _exp_ramp(800.0, 200.0, duration, t)
    wave = np.sign(np.sin(_sweep_phase(freq, sample_rate)))
    return wave * _exp_ramp(0.03, 0.001, duration, t)


def explosion_cutoff(size: float) -> float:
    """Starting low-pass cutoff: bigger asteroids sound deeper."""
    if size > 40:
        return 400.0
    if size > 20:
        return 600.0
    return 800.0


def lowpass(wave: np.ndarray, sample_rate: int, cutoff: float) -> np.ndarray:
    """Moving-average low-pass: the window spans one period of the cutoff."""
    window = max(1, int(sample_rate / cutoff))
    kernel = np.ones(window) / window
    return np.convolve(wave, kernel, mode='same')


def synth_explosion(sample_rate: int, size: float,
                    rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """White noise through a low-pass filter whose cutoff sweeps down to 100 Hz."""
    rng = rng or np.random.default_rng()
    duration = 0.3
    n = int(duration * sample_rate)
    t = np.arange(n) / sample_rate

    noise = rng.uniform(-1.0, 1.0, n)
    cutoff = _exp_ramp(explosion_cutoff(size), 100.0, duration, t)

    # Filter in 10ms segments, each with the cutoff at its start. Segments
    # are filtered with one window of context on each side so they join up.
    filtered = np.empty(n)
    segment = max(1, int(0.01 * sample_rate))
    for start in range(0, n, segment):
        stop = min(start + segment, n)
        context = max(1, int(sample_rate / cutoff[start]))
        lo, hi = max(0, start - context), min(n, stop + context)
        filtered[start:stop] = lowpass(noise[lo:hi], sample_rate, cutoff[start])[start - lo:stop - lo]

    return filtered * _exp_ramp(0.2, 0.01, duration, t)


def synth_ship_death(sample_rate: int) -> np.ndarray:
    """Soft low rumble."""
    duration = 0.4
    t = np.arange(int(duration * sample_rate)) / sample_rate
    freq = _exp_ramp(200.0, 50.0, duration, t)
    wave = np.sin(_sweep_phase(freq, sample_rate))
    return wave * _exp_ramp(0.1, 0.01, duration, t)


def synth_game_over(sample_rate: int) -> np.ndarray:
    """Descending tone: hold volume for half a second, then fade."""
    duration = 1.2
    t = np.arange(int(duration * sample_rate)) / sample_rate
    freq = _exp_ramp(440.0, 110.0, 1.0, t)
    wave = np.sin(_sweep_phase(freq, sample_rate))
    gain = np.where(t < 0.5, 0.15, _exp_ramp(0.15, 0.01, 0.7, t - 0.5))
    return wave * gain


def to_pcm(wave: np.ndarray, channels: int = 1, volume: float = 1.0) -> np.ndarray:
    """Convert a float wave in [-1, 1] to signed 16-bit samples."""
    samples = np.clip(wave * volume, -1.0, 1.0)
    pcm = (samples * 32767).astype(np.int16)
    if channels > 1:
        pcm = np.repeat(pcm[:, np.newaxis], channels, axis=1)
    return np.ascontiguousarray(pcm)


# =============================================================================
# PLAYBACK
# =============================================================================

class SoundEffects:
    """
    pygame.mixer backed sound player.

    Example:
        >>> audio = SoundEffects(config)
        >>> audio.play(SoundEffect.SHOOT)
        >>> audio.play(SoundEffect.EXPLOSION, size=60)
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.enabled = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}

        if not self.config.AUDIO_ENABLED:
            logger.info("Audio disabled")
            return

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(self.config.AUDIO_SAMPLE_RATE, -16, 2, self.config.AUDIO_BUFFER)
            sample_rate, _, channels = pygame.mixer.get_init()
            self._build_sounds(sample_rate, channels)
        except pygame.error as e:
            logger.warning(f"Audio unavailable, continuing silently: {e}")
            return

        self.enabled = True
        logger.info(f"Audio initialized ({sample_rate} Hz, {channels} ch)")

    def _build_sounds(self, sample_rate: int, channels: int) -> None:
        volume = self.config.AUDIO_VOLUME

        def make(wave: np.ndarray) -> pygame.mixer.Sound:
            return pygame.sndarray.make_sound(to_pcm(wave, channels, volume))

        self._sounds[SoundEffect.SHOOT.value] = make(synth_shoot(sample_rate))
        self._sounds[SoundEffect.SHIP_DEATH.value] = make(synth_ship_death(sample_rate))
        self._sounds[SoundEffect.GAME_OVER.value] = make(synth_game_over(sample_rate))

        # One explosion per asteroid tier
        for tier, size in (('large', 60), ('medium', 30), ('small', 15)):
            self._sounds[f'explosion_{tier}'] = make(synth_explosion(sample_rate, size))

    @staticmethod
    def _explosion_key(size: float) -> str:
        if size > 40:
            return 'explosion_large'
        if size > 20:
            return 'explosion_medium'
        return 'explosion_small'

    def play(self, effect: SoundEffect, **params) -> None:
        """Play an effect. Never raises; silent when audio is unavailable."""
        if not self.enabled:
            return

        if effect is SoundEffect.EXPLOSION:
            key = self._explosion_key(params.get('size', 60))
        else:
            key = effect.value

        sound = self._sounds.get(key)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.debug(f"Could not play {key}: {e}")

    def close(self) -> None:
        """Release the mixer."""
        if self.enabled:
            pygame.mixer.quit()
            self.enabled = False
