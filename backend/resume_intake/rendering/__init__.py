"""HTML template rendering and headless-browser PDF rasterization."""
