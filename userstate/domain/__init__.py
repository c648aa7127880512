"""Domain layer: user state model, record codec, errors, ports and the live stream."""
