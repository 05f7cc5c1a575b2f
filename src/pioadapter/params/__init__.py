"""Bidder params validation."""

from .validator import parse_params, parse_size, validate_params

__all__ = ["parse_params", "parse_size", "validate_params"]
