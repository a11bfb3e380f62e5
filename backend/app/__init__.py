"""TeachHub backend."""
