"""HTTP layer: application factory, routes and dependencies."""
