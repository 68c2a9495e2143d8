"""Service layer: closure resolution, manifest synthesis and packaging."""
