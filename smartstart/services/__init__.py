"""Service layer: auth, data access and checks."""
