"""PLANETSEARCH integration tests: HTTP API over sample gazetteers."""
