"""Service version that is read by project manager tools."""

# keep in sync with project version in pyproject.toml
__version__ = "0.3.0"
