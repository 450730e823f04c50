"""
Test audio fixture generator.

Generates minimal valid audio files for testing without requiring external files.
Uses pure Python (wave module) to create test audio files programmatically.
"""

import json
import math
import os
import struct
import sys
import wave
from pathlib import Path

# Low rate keeps fixtures small; the pipeline never looks at the samples
DEFAULT_SAMPLE_RATE = 8000


def generate_sine_wave(
    frequency: float, duration: float, sample_rate: int = DEFAULT_SAMPLE_RATE, amplitude: float = 0.5
) -> bytes:
    """
    Generate a sine wave as raw PCM audio data.

    Args:
        frequency: Frequency in Hz
        duration: Duration in seconds
        sample_rate: Sample rate in Hz
        amplitude: Amplitude (0.0 to 1.0)

    Returns:
        Raw PCM audio data (16-bit signed integers, mono)
    """
    num_samples = int(sample_rate * duration)
    audio_data = []

    for i in range(num_samples):
        t = i / sample_rate
        value = amplitude * math.sin(2 * math.pi * frequency * t)
        sample = int(value * 32767)
        audio_data.append(struct.pack("<h", sample))  # Little-endian signed short

    return b"".join(audio_data)


def write_wav_frames(output_path: str | Path, frames: bytes, sample_rate: int = DEFAULT_SAMPLE_RATE) -> Path:
    """Write raw 16-bit mono PCM frames as a WAV file."""
    if len(frames) % 2:
        frames += b"\x00"
    os.makedirs(os.path.dirname(str(output_path)) or ".", exist_ok=True)
    with wave.open(str(output_path), "wb") as wav_file:
        wav_file.setnchannels(1)
        wav_file.setsampwidth(2)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(frames)
    return Path(output_path)


def create_wav_file(output_path: str | Path, duration: float = 1.0, frequency: float = 440.0) -> Path:
    """
    Create a WAV file with a sine wave.

    Args:
        output_path: Path to save WAV file
        duration: Duration in seconds
        frequency: Frequency in Hz (440 Hz = A4 note)

    Returns:
        Path of the created file
    """
    return write_wav_frames(output_path, generate_sine_wave(frequency, duration))


def write_record_file(spectrograms_dir: Path, md5_hash: str, matrix: list[list[float]], file_name: str = "") -> Path:
    """Write a spectrogram record by hand (bypassing the store)."""
    path = spectrograms_dir / f"{md5_hash}.json"
    payload = {
        "file_name": file_name or f"{md5_hash}.wav",
        "md5_hash": md5_hash,
        "chunk_path": str(spectrograms_dir / (file_name or f"{md5_hash}.wav")),
        "spectrogram": matrix,
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def create_test_fixtures(fixtures_dir: str = "tests/fixtures") -> dict[str, Path]:
    """
    Create the sample WAV fixtures.

    Returns:
        Dictionary mapping fixture names to file paths
    """
    os.makedirs(fixtures_dir, exist_ok=True)
    return {
        "basic": create_wav_file(os.path.join(fixtures_dir, "test_basic.wav"), duration=1.0, frequency=440.0),
        "long": create_wav_file(os.path.join(fixtures_dir, "test_long.wav"), duration=4.0, frequency=523.25),
    }


if __name__ == "__main__":
    fixtures = create_test_fixtures()
    print("Generated test fixtures:", file=sys.stderr)
    for name, path in fixtures.items():
        print(f"  {name}: {path} ({os.path.getsize(path):,} bytes)", file=sys.stderr)
