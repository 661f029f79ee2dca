"""Structuring of results."""

from .rule_results import RuleResults
