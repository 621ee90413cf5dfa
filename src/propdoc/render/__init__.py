"""Typography, layout and PDF encoding."""
