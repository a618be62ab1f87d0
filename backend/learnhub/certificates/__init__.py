"""Certificate issuance module."""
