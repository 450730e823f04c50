"""Version information for NeuralForge."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to on-disk project layout or record schema
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.2.0 - Resumable chunk processing and configurable pipeline
#         - process --resume feeds leftover segment WAVs back into the extractor pool
#         - Bounded worker pool shared by extractor and cluster-count loader
#         - Seeded k-means for reproducible elbow results
#         - YAML/env configuration service
# 0.1.0 - Initial pre-alpha release
#         - WAV normalization, silence chunking, spectrogram records
#         - Elbow estimate of cluster count
