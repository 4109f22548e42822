"""Command-line interface for resume_synth."""
