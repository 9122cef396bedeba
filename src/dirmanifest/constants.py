"""Constants for dir-manifest."""

# Output file naming: <root name>_manifest.json next to the scanned root
MANIFEST_SUFFIX = "manifest.json"
OUTPUT_SUFFIX = "_manifest.json"

# Hashing
DEFAULT_CHUNK_SIZE = 64 * 1024
WORKERS_PER_CPU = 2

# Version
VERSION = "0.1.0"
