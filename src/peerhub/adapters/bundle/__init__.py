"""JSON codec for portable peer bundles."""

from __future__ import annotations

from .codec import BundleFormatError, bundle_filename, dump_bundle, parse_import_payload

__all__ = ["BundleFormatError", "bundle_filename", "dump_bundle", "parse_import_payload"]
