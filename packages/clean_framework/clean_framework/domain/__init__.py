"""Domain layer: enums, outcomes, exceptions and collaborator interfaces."""
