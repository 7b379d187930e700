"""Coaching rules: ordered decision tables and discoverable phase rules."""
