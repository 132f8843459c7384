# projecthub/core/upload_constants.py
"""Constants for image upload and validation"""

# File size limits
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024  # 5 MiB, inclusive

# Only this MIME family is accepted
IMAGE_MIME_PREFIX = "image/"

# Used when the original filename carries no extension
DEFAULT_IMAGE_EXTENSION = "jpg"

# Bucket names that are treated as "not configured"
PLACEHOLDER_BUCKET_NAMES = {"", "undefined", "null", "none"}

# S3 bucket policy document version
POLICY_VERSION = "2012-10-17"
