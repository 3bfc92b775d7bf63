"""Wikelo item catalog and generic wiki page parser for MediaWiki sites."""

__version__ = "0.1.0"
