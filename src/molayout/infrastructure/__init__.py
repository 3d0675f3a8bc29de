"""Infrastructure layer: file formats and toolkit adapters."""
