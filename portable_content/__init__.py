"""
Portable content - sanitize-then-validate pipeline for content items.

Raw, loosely typed create/update requests go in; either cleaned data ready
for building a ContentItem or a field-addressable list of violations comes out.
"""

__version__ = "0.1.0"
