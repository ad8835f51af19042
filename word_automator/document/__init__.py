"""Word session and document control."""
