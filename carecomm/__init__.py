"""Care-facility notification dispatch service."""
