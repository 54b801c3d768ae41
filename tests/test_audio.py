"""Tests for audio decoding and metric estimation."""

import base64
import io

import numpy as np
import pytest
import soundfile as sf

from speaking_placement.audio.decoder import AudioClip, AudioDecodeError, decode_audio
from speaking_placement.audio.metrics import (
    compute_pause_ratio,
    compute_volume_variation,
    estimate_audio_metrics,
    estimate_word_count,
)
from speaking_placement.config import Settings

SR = 16000


def _tone(freq: float, seconds: float, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(int(SR * seconds)) / SR
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


def _bursts(n: int = 10) -> np.ndarray:
    """n x (0.3 s tone + 0.2 s silence) = n / 2 seconds."""
    burst = np.concatenate([_tone(440, 0.3), np.zeros(int(SR * 0.2), dtype=np.float32)])
    return np.tile(burst, n)


def _wav_bytes(samples: np.ndarray, sample_rate: int = SR) -> bytes:
    buf = io.BytesIO()
    sf.write(buf, samples, sample_rate, format="WAV")
    return buf.getvalue()


@pytest.fixture
def settings() -> Settings:
    return Settings()


class TestDecoder:
    def test_decode_wav_bytes(self):
        clip = decode_audio(_wav_bytes(_tone(440, 0.5)))
        assert clip.sample_rate == SR
        assert len(clip.samples) == SR // 2
        assert clip.samples.dtype == np.float32
        assert clip.duration_seconds == pytest.approx(0.5)

    def test_stereo_is_downmixed(self):
        stereo = np.stack([_tone(440, 0.25), np.zeros(SR // 4, dtype=np.float32)], axis=1)
        clip = decode_audio(_wav_bytes(stereo))
        assert clip.samples.ndim == 1
        assert np.max(np.abs(clip.samples)) == pytest.approx(0.25, abs=0.01)

    def test_clip_passes_through(self):
        clip = AudioClip(samples=_tone(440, 0.1), sample_rate=SR)
        assert decode_audio(clip) is clip

    def test_garbage_bytes(self):
        with pytest.raises(AudioDecodeError):
            decode_audio(b"definitely not audio data")

    def test_empty_bytes(self):
        with pytest.raises(AudioDecodeError):
            decode_audio(b"")

    def test_unsupported_type(self):
        with pytest.raises(AudioDecodeError):
            decode_audio("a/path/to/file.wav")  # type: ignore[arg-type]

    def test_pcm16_from_base64(self):
        pcm = np.array([32767, -32767, 0], dtype=np.int16).tobytes()
        clip = AudioClip.from_base64(base64.b64encode(pcm).decode("ascii"), SR)
        np.testing.assert_allclose(clip.samples, [1.0, -1.0, 0.0], atol=1e-6)

    def test_odd_pcm16_buffer(self):
        with pytest.raises(AudioDecodeError):
            AudioClip.from_pcm16(b"\x00\x01\x02", SR)

    def test_invalid_sample_rate(self):
        with pytest.raises(ValueError):
            AudioClip(samples=np.zeros(10), sample_rate=0)


class TestMetrics:
    def test_word_boundaries_from_energy(self, settings):
        assert estimate_word_count(_bursts(10), SR, settings) == 10

    def test_speaking_rate(self, settings):
        metrics = estimate_audio_metrics(AudioClip(samples=_bursts(10), sample_rate=SR), settings)
        assert metrics.duration_seconds == pytest.approx(5.0)
        assert metrics.speaking_rate == pytest.approx(120.0)
        # 40% silence plus sine samples near zero crossings
        assert metrics.pause_ratio == pytest.approx(0.4, abs=0.02)

    def test_pause_ratio_exact(self):
        samples = np.concatenate([np.full(SR, 0.5), np.zeros(SR)]).astype(np.float32)
        assert compute_pause_ratio(samples, 0.01) == pytest.approx(0.5)

    def test_volume_variation(self):
        steady = np.full(SR, 0.5, dtype=np.float32)
        assert compute_volume_variation(steady, 20) == pytest.approx(0.0, abs=1e-6)
        uneven = np.concatenate([steady, np.zeros(SR, dtype=np.float32)])
        assert compute_volume_variation(uneven, 20) == pytest.approx(0.25, abs=1e-3)

    def test_clarity_presence_band(self, settings):
        bright = estimate_audio_metrics(AudioClip(samples=_tone(4000, 1.0), sample_rate=SR), settings)
        dull = estimate_audio_metrics(AudioClip(samples=_tone(300, 1.0), sample_rate=SR), settings)
        assert bright.clarity > 95
        assert dull.clarity < 62
        assert 60 <= dull.clarity <= bright.clarity <= 100

    def test_silence(self, settings):
        metrics = estimate_audio_metrics(AudioClip(samples=np.zeros(SR), sample_rate=SR), settings)
        assert metrics.pause_ratio == 1.0
        assert metrics.clarity == 60.0
        assert metrics.speaking_rate == pytest.approx(60.0)  # floor of one word

    def test_short_clip_is_padded(self, settings):
        clip = AudioClip(samples=_tone(4000, 0.01), sample_rate=SR)
        metrics = estimate_audio_metrics(clip, settings)
        assert 60 <= metrics.clarity <= 100

    def test_non_finite_samples_rejected(self, settings):
        samples = np.array([0.1, np.nan, 0.2], dtype=np.float32)
        with pytest.raises(ValueError):
            estimate_audio_metrics(AudioClip(samples=samples, sample_rate=SR), settings)
