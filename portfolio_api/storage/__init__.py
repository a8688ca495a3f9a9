"""
Blob storage layer for the portfolio API.
Supports an HTTP file bucket and the local filesystem.
"""

from portfolio_api.storage.base import BlobStore
from portfolio_api.storage.http_bucket import HttpBucketStore
from portfolio_api.storage.local import LocalBlobStore
from portfolio_api.storage.factory import create_blob_store

__all__ = [
    "BlobStore",
    "HttpBucketStore",
    "LocalBlobStore",
    "create_blob_store",
]
