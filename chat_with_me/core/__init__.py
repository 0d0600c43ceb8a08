"""Domain core: models, protocols, services, strategies."""
