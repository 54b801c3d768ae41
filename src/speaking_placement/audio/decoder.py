"""Audio buffer decoding into mono float32 waveforms."""

import base64
import io

import numpy as np
import soundfile as sf
from pydantic import BaseModel, ConfigDict, field_validator


class AudioDecodeError(ValueError):
    """Raised when an audio buffer cannot be turned into samples."""


class AudioClip(BaseModel):
    """Decoded mono waveform in range [-1.0, 1.0]."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    samples: np.ndarray
    sample_rate: int

    @field_validator("samples", mode="before")
    @classmethod
    def _to_mono_float32(cls, value: object) -> np.ndarray:
        samples = np.asarray(value, dtype=np.float32)
        if samples.ndim == 2:
            # soundfile layout is (frames, channels)
            samples = samples.mean(axis=1)
        if samples.ndim != 1:
            raise ValueError(f"Expected 1-D or 2-D audio, got {samples.ndim}-D")
        return samples

    @field_validator("sample_rate")
    @classmethod
    def _positive_rate(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("sample_rate must be positive")
        return value

    @property
    def duration_seconds(self) -> float:
        return len(self.samples) / self.sample_rate

    @classmethod
    def from_pcm16(cls, data: bytes, sample_rate: int) -> "AudioClip":
        """Build a clip from raw little-endian PCM16 bytes."""
        if len(data) % 2:
            raise AudioDecodeError("PCM16 buffer has an odd number of bytes")
        pcm16 = np.frombuffer(data, dtype=np.int16)
        return cls(samples=pcm16.astype(np.float32) / 32767.0, sample_rate=sample_rate)

    @classmethod
    def from_base64(cls, data: str, sample_rate: int) -> "AudioClip":
        """Build a clip from base64-encoded PCM16."""
        try:
            pcm_bytes = base64.b64decode(data, validate=True)
        except ValueError as e:
            raise AudioDecodeError(f"Invalid base64 audio: {e}") from e
        return cls.from_pcm16(pcm_bytes, sample_rate)


def decode_audio(buffer: AudioClip | bytes | bytearray) -> AudioClip:
    """Decode an audio buffer.

    Args:
        buffer: An already-decoded clip, or encoded container bytes
            (WAV, FLAC, OGG; anything libsndfile reads).

    Returns:
        Mono AudioClip.

    Raises:
        AudioDecodeError: If the buffer is empty or cannot be decoded.
    """
    if isinstance(buffer, AudioClip):
        clip = buffer
    elif isinstance(buffer, (bytes, bytearray)):
        if not buffer:
            raise AudioDecodeError("Empty audio buffer")
        try:
            data, sample_rate = sf.read(io.BytesIO(bytes(buffer)), dtype="float32", always_2d=False)
        except (sf.LibsndfileError, RuntimeError, TypeError) as e:
            raise AudioDecodeError(f"Unsupported or corrupt audio: {e}") from e
        clip = AudioClip(samples=data, sample_rate=int(sample_rate))
    else:
        raise AudioDecodeError(f"Unsupported audio buffer type: {type(buffer).__name__}")

    if clip.samples.size == 0:
        raise AudioDecodeError("Audio contains no samples")
    return clip
