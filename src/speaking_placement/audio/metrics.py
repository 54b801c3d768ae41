"""Coarse speech metrics from a decoded waveform.

These are heuristic proxies computed from signal energy and spectrum only.
``clarity`` in particular is the share of energy in a "presence" band, not a
linguistic or phonetic measure of how clearly anything was pronounced.
"""

import numpy as np
import structlog

from speaking_placement.audio.decoder import AudioClip
from speaking_placement.config import Settings, get_settings
from speaking_placement.models.assessment import AudioMetrics

logger = structlog.get_logger()


def _frame_rms(samples: np.ndarray, window: int) -> np.ndarray:
    """RMS of consecutive full windows."""
    n_frames = len(samples) // window
    if n_frames == 0:
        return np.zeros(0, dtype=np.float64)
    frames = samples[: n_frames * window].astype(np.float64).reshape(n_frames, window)
    return np.sqrt(np.mean(frames ** 2, axis=1))


def estimate_word_count(samples: np.ndarray, sample_rate: int, settings: Settings) -> int:
    """Count energy drops that look like word boundaries.

    A boundary is a window above the energy threshold followed by a window
    below half of it.
    """
    window = max(1, int(sample_rate * settings.energy_window_ms / 1000))
    rms = _frame_rms(samples, window)
    threshold = settings.energy_threshold
    boundaries = int(np.count_nonzero((rms[:-1] > threshold) & (rms[1:] < threshold * 0.5)))
    return max(1, boundaries)


def compute_pause_ratio(samples: np.ndarray, silence_threshold: float) -> float:
    return float(np.mean(np.abs(samples) < silence_threshold))


def compute_volume_variation(samples: np.ndarray, n_windows: int) -> float:
    """Population standard deviation of RMS over equal windows."""
    window = max(1, len(samples) // n_windows)
    volumes = [
        np.sqrt(np.mean(samples[i : i + window].astype(np.float64) ** 2))
        for i in range(0, len(samples), window)
    ]
    return float(np.std(volumes))


def estimate_clarity(samples: np.ndarray, sample_rate: int, settings: Settings) -> float:
    """Presence-band energy share scaled into [60, 100]."""
    fft_size = settings.fft_size
    if len(samples) < fft_size:
        samples = np.pad(samples, (0, fft_size - len(samples)))
    n_frames = len(samples) // fft_size
    frames = samples[: n_frames * fft_size].astype(np.float64).reshape(n_frames, fft_size)
    spectrum = np.abs(np.fft.rfft(frames * np.hanning(fft_size), axis=1)) ** 2
    power = spectrum.mean(axis=0)
    freqs = np.fft.rfftfreq(fft_size, d=1.0 / sample_rate)

    total = float(power.sum())
    if total <= 0:
        return 60.0
    band = (freqs > settings.presence_band_low_hz) & (freqs < settings.presence_band_high_hz)
    ratio = float(power[band].sum()) / total
    return float(min(100.0, max(60.0, 60.0 + ratio * 40.0)))


def estimate_audio_metrics(clip: AudioClip, settings: Settings | None = None) -> AudioMetrics:
    """Estimate speaking rate, pauses, volume variation and clarity.

    Args:
        clip: Decoded mono audio.
        settings: Thresholds and window sizes; defaults to global settings.

    Returns:
        AudioMetrics for the clip.
    """
    settings = settings or get_settings()
    samples = clip.samples
    if samples.size == 0:
        raise ValueError("Cannot estimate metrics for empty audio")
    if not np.all(np.isfinite(samples)):
        raise ValueError("Audio contains non-finite samples")

    duration = clip.duration_seconds
    words = estimate_word_count(samples, clip.sample_rate, settings)
    metrics = AudioMetrics(
        speaking_rate=words / duration * 60,
        pause_ratio=compute_pause_ratio(samples, settings.silence_threshold),
        volume_variation=compute_volume_variation(samples, settings.volume_windows),
        clarity=estimate_clarity(samples, clip.sample_rate, settings),
        duration_seconds=duration,
    )
    logger.debug(
        "audio_metrics_estimated",
        speaking_rate=round(metrics.speaking_rate, 1),
        pause_ratio=round(metrics.pause_ratio, 3),
        clarity=round(metrics.clarity, 1),
    )
    return metrics
