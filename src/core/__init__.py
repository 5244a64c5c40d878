"""Release client core: domain models, contracts, configuration and services."""
