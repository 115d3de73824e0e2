"""Redline comparison of version snapshots."""

from rqmt_redline.redline.comparator import compare_requirements, compare_test_cases

__all__ = ["compare_requirements", "compare_test_cases"]
