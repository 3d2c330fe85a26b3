"""
VaultPrep Test Suite

This package contains all test modules for VaultPrep:
- test_naming.py, test_csv_serializer.py: naming and CSV helpers
- test_*_compiler.py, test_source_registrar.py: relation compilers
- test_exporter.py, test_metadata_store.py: export facade and persistence
- test_schema_introspector.py: database introspection
- test_api.py, test_cli.py: FastAPI and command line surfaces
"""
