"""Display helpers shared by controllers and endpoints."""
