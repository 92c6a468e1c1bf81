"""
Test suite for the print shop scheduler.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_delivery_projector_service.py -v
"""
