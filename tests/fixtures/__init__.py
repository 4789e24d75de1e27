"""
PLANETSEARCH Test Fixtures

Gazetteer CSV builders shared by unit and integration tests.
"""
