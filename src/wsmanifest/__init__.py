"""wsmanifest: standalone package manifests for workspace projects."""

__version__ = "0.1.0"
