"""Library CLI - UI helpers and input validators."""
