"""Command-line diagnostics and settings files for deblurkit."""
