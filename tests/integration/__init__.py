"""
Integration tests for neuralforge.

These run whole phases and the full pipeline against real project
directories in temp folders:
- Real content store, error log and file lists on disk
- Real spectrogram decoding and k-means
- FakeRenderer in place of the ffmpeg binary
"""
