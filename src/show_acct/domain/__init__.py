"""Domain layer - record layouts, canonical records and decoding services."""
