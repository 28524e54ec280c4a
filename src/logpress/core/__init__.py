"""Scanning, eligibility rules, size thresholds and configuration."""
