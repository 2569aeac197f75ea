"""Service layer: persistence and domain operations used by the web routes."""
