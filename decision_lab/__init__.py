"""Make / Buy / Partner decision lab backend."""
