"""Domain layer: entities, errors and the services of the import pipeline."""
