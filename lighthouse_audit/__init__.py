"""Lighthouse audit history, aggregation and dashboards for browser test suites."""
