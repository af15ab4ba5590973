"""Runtime components: REST transport and pagination drivers."""
