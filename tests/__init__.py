"""
STIG Viewer Test Suite

Test Organization:
- test_core/ - Core infrastructure tests (constants, config, logging, deps)
- test_models/ - Canonical STIG model tests
- test_xml/ - XML helpers and schema tests
- test_parsers/ - XCCDF and CKL parser tests
- test_export/ - CKL and POAM exporter tests
- test_controls/ - CCI lookup tests
- test_processor/ - Diff, review operations and processor tests
- test_io/ - File operations tests
- test_ui/ - Command-line interface tests
- test_integration/ - End-to-end workflow tests

Requirements:
- Python 3.9+
- pytest (for running tests)
- pytest-cov (for coverage reports)

Running Tests:
    # All tests
    python -m pytest tests/ -v

    # Specific module
    python -m pytest tests/test_parsers/ -v

    # With coverage
    python -m pytest tests/ -v --cov=stig_viewer --cov-report=html

    # Skip end-to-end workflows
    python -m pytest tests/ -m "not integration"
"""

__version__ = "1.0.0"
__all__ = []
