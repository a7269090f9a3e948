"""In-memory rendition of the albums API for local development and tests."""
