"""
Portland Redbird Portfolio API

Backend for a personal art-portfolio site. Image binaries live in an
external file bucket, their metadata and tags live in PostgreSQL.
"""

__version__ = "1.0.0"
