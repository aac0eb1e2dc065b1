"""Library Catalog test suite."""
