"""Bundled scene types. Each module here is one registrable scene."""
